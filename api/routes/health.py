"""
Health check route for service liveness.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict

from fastapi import APIRouter

from config import settings
from api.routes.exception import handle_exceptions

router = APIRouter(tags=["Health"])


@router.get("/health")
@handle_exceptions
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "metrics_backend": settings.metrics_backend,
    }
