"""
Forecast routes serving the storage capacity chart data: observed total and
used capacity per day followed by the linear forecast towards the predicted
used capacity.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from fastapi import APIRouter

from api.requests import StorageForecastRequest
from api.responses import StorageForecastResponse
from api.routes.common import get_provider
from api.routes.exception import handle_exceptions
from services.forecast_service import build_storage_forecast

router = APIRouter(tags=["Forecast"])


@router.post(
    "/forecast/storage",
    response_model=StorageForecastResponse,
    summary="Daily storage capacity history with a linear usage forecast",
)
@handle_exceptions
async def storage_forecast(req: StorageForecastRequest) -> StorageForecastResponse:
    return await build_storage_forecast(get_provider(req.tenant_id), req)
