"""
Capacity projection: day-aligned merge of total and used capacity series with a
linear forecast towards a predicted value, plus horizon parsing and the error
taxonomy shared by both.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.projection.errors import (
    AnchorUnavailableError,
    ConfigurationError,
    DuplicateLabelError,
    EmptyInputError,
    MissingPredictionError,
    PartialJoinWarning,
    ProjectionError,
    SeriesShapeError,
)
from engine.projection.horizon import HorizonSpec, parse_horizon
from engine.projection.projector import ProjectedSeries, UnifiedPoint, project
from engine.projection.series import TimeSeriesPoint, day_label, extract_prediction, normalize

__all__ = [
    "AnchorUnavailableError",
    "ConfigurationError",
    "DuplicateLabelError",
    "EmptyInputError",
    "MissingPredictionError",
    "PartialJoinWarning",
    "ProjectionError",
    "SeriesShapeError",
    "HorizonSpec",
    "parse_horizon",
    "ProjectedSeries",
    "UnifiedPoint",
    "project",
    "TimeSeriesPoint",
    "day_label",
    "extract_prediction",
    "normalize",
]
