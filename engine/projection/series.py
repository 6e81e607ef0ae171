"""
Normalization of raw capacity query results into day-labelled points, keyed by
calendar day in an explicit time zone so that series with slightly different
sample timestamps still line up on the same day.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Any, List, Mapping, Sequence, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from engine.projection.errors import ConfigurationError, MissingPredictionError, SeriesShapeError

TIME_FIELD = "beginTimeSeconds"
VALUE_FIELD = "value"
DEFAULT_LABEL_FORMAT = "%Y-%m-%d"

TimeZoneLike = Union[str, tzinfo]


@dataclass(frozen=True)
class TimeSeriesPoint:
    timestamp_seconds: int
    label: str
    value: float


def resolve_timezone(tz: TimeZoneLike) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(str(tz))
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"unknown time zone: {tz!r}") from exc


def local_day(timestamp_seconds: int, tz: TimeZoneLike) -> date:
    return datetime.fromtimestamp(timestamp_seconds, resolve_timezone(tz)).date()


def day_label(timestamp_seconds: int, tz: TimeZoneLike, fmt: str = DEFAULT_LABEL_FORMAT) -> str:
    return local_day(timestamp_seconds, tz).strftime(fmt)


def _as_number(raw: Any, what: str) -> float:
    # bools are ints in Python but never a valid sample
    if isinstance(raw, bool):
        raise SeriesShapeError(f"{what} is not numeric: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise SeriesShapeError(f"{what} is not numeric: {raw!r}") from exc


def normalize(
    records: Sequence[Mapping[str, Any]],
    field: str = VALUE_FIELD,
    tz: TimeZoneLike = "UTC",
    fmt: str = DEFAULT_LABEL_FORMAT,
) -> List[TimeSeriesPoint]:
    zone = resolve_timezone(tz)
    points: List[TimeSeriesPoint] = []
    for i, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise SeriesShapeError(f"record {i} is not a mapping: {type(record).__name__}")
        if TIME_FIELD not in record:
            raise SeriesShapeError(f"record {i} has no {TIME_FIELD!r} field")
        if field not in record:
            raise SeriesShapeError(f"record {i} has no {field!r} field")
        raw_ts = _as_number(record[TIME_FIELD], f"record {i} {TIME_FIELD}")
        if not math.isfinite(raw_ts):
            raise SeriesShapeError(f"record {i} {TIME_FIELD} is not finite: {raw_ts!r}")
        ts = int(raw_ts)
        points.append(
            TimeSeriesPoint(
                timestamp_seconds=ts,
                label=day_label(ts, zone, fmt),
                value=_as_number(record[field], f"record {i} {field}"),
            )
        )
    return points


def extract_prediction(records: Sequence[Mapping[str, Any]], field: str = VALUE_FIELD) -> float:
    if len(records) != 1:
        raise MissingPredictionError(
            f"prediction query must return exactly one result, got {len(records)}"
        )
    record = records[0]
    if not isinstance(record, Mapping) or field not in record:
        raise MissingPredictionError(f"prediction result has no {field!r} field")
    try:
        value = _as_number(record[field], "prediction")
    except SeriesShapeError as exc:
        raise MissingPredictionError(str(exc)) from exc
    if not math.isfinite(value):
        raise MissingPredictionError(f"prediction is not finite: {value!r}")
    return value
