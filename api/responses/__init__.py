"""
Response models for the storage forecast API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.enums import ChartKind, SeriesKey


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class ForecastPoint(BaseModel):

    label: str
    name: str
    available: Optional[float] = None
    used: Optional[float] = None
    prediction: Optional[float] = None

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        # unknown fields are omitted
        return {k: v for k, v in _coerce(handler(self)).items() if v is not None}


class ChartSeries(NpModel):

    key: SeriesKey
    name: str
    kind: ChartKind
    color: str


class DroppedPoint(NpModel):

    label: str
    timestamp: int
    value: float


class StorageForecastResponse(NpModel):

    tenant_id: str
    unit: str
    timezone: str
    horizon_days: int
    anchor_label: str
    anchor_value: float
    step_per_day: float
    points: List[ForecastPoint]
    series: List[ChartSeries]
    dropped_points: List[DroppedPoint] = Field(default_factory=list)
