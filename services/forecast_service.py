"""
Storage forecast service: resolves the queries and horizon for a request,
fetches the capacity inputs from the tenant's metrics backend and projects
them into the chart series.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
from typing import List

from api.requests import StorageForecastRequest
from api.responses import ChartSeries, DroppedPoint, ForecastPoint, StorageForecastResponse
from config import CHART_SERIES, settings
from datasources.provider import DataSourceProvider
from engine.fetcher import fetch_capacity_inputs
from engine.projection import (
    ConfigurationError,
    ProjectedSeries,
    extract_prediction,
    parse_horizon,
    project,
)
from engine.projection.series import resolve_timezone

log = logging.getLogger(__name__)


def resolve_horizon_days(req: StorageForecastRequest, prediction_query: str) -> int:
    if req.horizon_days is not None:
        days = req.horizon_days
    else:
        days = parse_horizon(prediction_query).days
    if days > settings.forecast_max_horizon_days:
        raise ConfigurationError(
            f"horizon of {days} days exceeds the limit of {settings.forecast_max_horizon_days}"
        )
    return days


def chart_series() -> List[ChartSeries]:
    series: List[ChartSeries] = []
    for key in settings.chart_series_order:
        name, kind, color = CHART_SERIES[key]
        series.append(ChartSeries(key=key, name=name, kind=kind, color=color))
    return series


def to_response(tenant_id: str, timezone: str, projected: ProjectedSeries) -> StorageForecastResponse:
    return StorageForecastResponse(
        tenant_id=tenant_id,
        unit=settings.chart_unit,
        timezone=timezone,
        horizon_days=projected.horizon_days,
        anchor_label=projected.anchor_label,
        anchor_value=projected.anchor_value,
        step_per_day=projected.step,
        points=[ForecastPoint(**row) for row in projected.to_rows()],
        series=chart_series(),
        dropped_points=[
            DroppedPoint(label=w.label, timestamp=w.timestamp_seconds, value=w.value)
            for w in projected.dropped
        ],
    )


async def build_storage_forecast(
    provider: DataSourceProvider,
    req: StorageForecastRequest,
) -> StorageForecastResponse:
    total_query = req.total_query or settings.default_total_query
    used_query = req.used_query or settings.default_used_query
    prediction_query = req.prediction_query or settings.default_prediction_query
    timezone = req.timezone or settings.forecast_timezone

    # configuration problems surface before any backend round trip
    horizon_days = resolve_horizon_days(req, prediction_query)
    resolve_timezone(timezone)

    inputs = await fetch_capacity_inputs(
        provider, total_query, used_query, prediction_query, req.start, req.end, req.step
    )
    projected = project(
        inputs.total,
        inputs.used,
        extract_prediction(inputs.prediction),
        horizon_days,
        tz=timezone,
        label_format=settings.forecast_label_format,
    )
    if projected.dropped:
        log.info(
            "storage forecast tenant=%s dropped %d used samples without a matching total day",
            req.tenant_id,
            projected.dropped_count,
        )
    log.debug(
        "storage forecast tenant=%s history=%d horizon=%d step=%.4f",
        req.tenant_id,
        projected.history_length,
        horizon_days,
        projected.step,
    )
    return to_response(req.tenant_id, timezone, projected)
