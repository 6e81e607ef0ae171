"""
Capacity series projection: joins the used-capacity series onto the total
capacity backbone by calendar day, anchors the forecast on the last backbone
day and extends it linearly towards the predicted value over the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from engine.projection.errors import (
    AnchorUnavailableError,
    ConfigurationError,
    DuplicateLabelError,
    EmptyInputError,
    MissingPredictionError,
    PartialJoinWarning,
)
from engine.projection.series import (
    DEFAULT_LABEL_FORMAT,
    VALUE_FIELD,
    TimeSeriesPoint,
    TimeZoneLike,
    local_day,
    normalize,
    resolve_timezone,
)


@dataclass(frozen=True)
class UnifiedPoint:
    label: str
    available: Optional[float] = None
    used: Optional[float] = None
    prediction: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {"label": self.label, "name": self.label}
        for key in ("available", "used", "prediction"):
            value = getattr(self, key)
            if value is not None:
                row[key] = value
        return row


@dataclass(frozen=True)
class ProjectedSeries:
    points: Tuple[UnifiedPoint, ...]
    history_length: int
    horizon_days: int
    anchor_label: str
    anchor_value: float
    step: float
    dropped: Tuple[PartialJoinWarning, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[UnifiedPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> UnifiedPoint:
        return self.points[index]

    @property
    def history(self) -> Tuple[UnifiedPoint, ...]:
        return self.points[: self.history_length]

    @property
    def forecast(self) -> Tuple[UnifiedPoint, ...]:
        return self.points[self.history_length :]

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    def to_rows(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.points]


def _validate_horizon(horizon_days: Any) -> int:
    if isinstance(horizon_days, bool) or not isinstance(horizon_days, numbers.Integral):
        raise ConfigurationError(f"horizon must be an integer number of days, got {horizon_days!r}")
    if horizon_days < 0:
        raise ConfigurationError(f"horizon must not be negative, got {horizon_days}")
    return int(horizon_days)


def _validate_prediction(prediction: Any) -> float:
    if isinstance(prediction, bool) or not isinstance(prediction, numbers.Real):
        raise MissingPredictionError(f"prediction must be a number, got {prediction!r}")
    value = float(prediction)
    if not math.isfinite(value):
        raise MissingPredictionError(f"prediction is not finite: {value!r}")
    return value


def _join(
    backbone: List[TimeSeriesPoint],
    secondary: List[TimeSeriesPoint],
) -> Tuple[List[UnifiedPoint], Tuple[PartialJoinWarning, ...]]:
    by_label: Dict[str, TimeSeriesPoint] = {}
    for point in secondary:
        by_label.setdefault(point.label, point)

    joined: List[UnifiedPoint] = []
    seen: set[str] = set()
    for point in backbone:
        if point.label in seen:
            raise DuplicateLabelError(f"backbone has more than one point for {point.label}")
        seen.add(point.label)
        match = by_label.get(point.label)
        joined.append(
            UnifiedPoint(
                label=point.label,
                available=point.value,
                used=match.value if match is not None else None,
            )
        )

    # unmatched days and same-day repeats never reach the output
    dropped = tuple(
        PartialJoinWarning(label=p.label, timestamp_seconds=p.timestamp_seconds, value=p.value)
        for p in secondary
        if p.label not in seen or by_label[p.label] is not p
    )
    return joined, dropped


def _anchor_value(joined: List[UnifiedPoint]) -> float:
    # the last day without a used sample carries the nearest prior one forward
    for point in reversed(joined):
        if point.used is not None:
            return point.used
    raise AnchorUnavailableError("no used-capacity value on or before the last backbone day")


def _ensure_distinct_labels(
    history: List[UnifiedPoint],
    future: List[UnifiedPoint],
    label_format: str,
) -> None:
    seen = {p.label for p in history}
    for point in future:
        if point.label in seen:
            raise ConfigurationError(
                f"label format {label_format!r} does not identify a single day: {point.label!r} repeats"
            )
        seen.add(point.label)


def project(
    total: Sequence[Mapping[str, Any]],
    used: Sequence[Mapping[str, Any]],
    prediction: float,
    horizon_days: int,
    tz: TimeZoneLike = "UTC",
    label_format: str = DEFAULT_LABEL_FORMAT,
    field: str = VALUE_FIELD,
) -> ProjectedSeries:
    """Merge total and used capacity by day and append a linear forecast.

    ``total`` drives the join: the historical part of the result has one point
    per ``total`` record, in order. ``used`` records whose day is not in
    ``total`` are reported on ``ProjectedSeries.dropped``. The last historical
    point gets ``prediction`` equal to its used value and each of the
    ``horizon_days`` synthesized days moves a constant step towards
    ``prediction``.
    """
    days = _validate_horizon(horizon_days)
    target = _validate_prediction(prediction)
    zone = resolve_timezone(tz)

    backbone = normalize(total, field=field, tz=zone, fmt=label_format)
    if not backbone:
        raise EmptyInputError("total capacity series is empty")
    secondary = normalize(used, field=field, tz=zone, fmt=label_format)

    joined, dropped = _join(backbone, secondary)
    last_used = _anchor_value(joined)
    joined[-1] = replace(joined[-1], prediction=last_used)

    step = 0.0
    future: List[UnifiedPoint] = []
    if days:
        step = (target - last_used) / days
        anchor_day = local_day(backbone[-1].timestamp_seconds, zone)
        values = last_used + step * np.arange(1, days + 1, dtype=float)
        future = [
            UnifiedPoint(
                label=(anchor_day + timedelta(days=i)).strftime(label_format),
                prediction=float(value),
            )
            for i, value in enumerate(values, start=1)
        ]
        _ensure_distinct_labels(joined, future, label_format)

    return ProjectedSeries(
        points=tuple(joined + future),
        history_length=len(joined),
        horizon_days=days,
        anchor_label=joined[-1].label,
        anchor_value=last_used,
        step=step,
        dropped=dropped,
    )
