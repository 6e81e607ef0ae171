"""
Fetcher for the three capacity inputs: total and used capacity as daily range
series and the predicted used capacity as a single instant value. Prometheus
payloads are converted into flat records carrying ``beginTimeSeconds`` and
``value``.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from datasources.exceptions import InvalidQuery
from datasources.provider import DataSourceProvider
from engine.projection.series import TIME_FIELD, VALUE_FIELD
from config import settings

log = logging.getLogger(__name__)

_T = TypeVar("_T")

Record = Dict[str, Any]


@dataclass(frozen=True)
class CapacityInputs:
    total: List[Record]
    used: List[Record]
    prediction: List[Record]


def _data(resp: Any, query: str) -> Dict[str, Any]:
    if not isinstance(resp, dict):
        raise InvalidQuery(f"query={query!r} returned {type(resp).__name__}, expected an object")
    data = resp.get("data")
    if not isinstance(data, dict):
        raise InvalidQuery(f"query={query!r}: missing 'data' object")
    return data


def _results(resp: Any, query: str) -> Any:
    return _data(resp, query).get("result", [])


def _sample(pair: Any) -> Optional[Record]:
    try:
        ts = int(float(pair[0]))
        value = float(pair[1])
    except (ValueError, TypeError, IndexError):
        return None
    if not math.isfinite(value):
        return None
    return {TIME_FIELD: ts, VALUE_FIELD: value}


def matrix_to_records(resp: Dict[str, Any], query: str = "") -> List[Record]:
    results = _results(resp, query)
    if not isinstance(results, list):
        raise InvalidQuery(f"query={query!r}: 'data.result' is not a list")
    if not results:
        return []
    if len(results) > 1:
        raise InvalidQuery(
            f"query={query!r} returned {len(results)} series; aggregate it to a single series"
        )
    if not isinstance(results[0], dict):
        raise InvalidQuery(f"query={query!r}: series entry is not an object")

    records: List[Record] = []
    skipped = 0
    for pair in results[0].get("values", []):
        record = _sample(pair)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        log.debug("matrix_to_records query=%s skipped %d malformed samples", query, skipped)
    return records


def vector_to_records(resp: Dict[str, Any], query: str = "") -> List[Record]:
    data = _data(resp, query)
    results = data.get("result", [])
    if data.get("resultType") == "scalar":
        record = _sample(results)
        return [record] if record is not None else []
    if not isinstance(results, list):
        raise InvalidQuery(f"query={query!r}: 'data.result' is not a list")

    records: List[Record] = []
    for row in results:
        if not isinstance(row, dict):
            continue
        record = _sample(row.get("value", []))
        if record is not None:
            records.append(record)
    return records


async def fetch_capacity_inputs(
    provider: DataSourceProvider,
    total_query: str,
    used_query: str,
    prediction_query: str,
    start: int,
    end: int,
    step: str,
) -> CapacityInputs:
    sem = asyncio.Semaphore(max(1, int(settings.gateway_max_parallel_queries)))

    async def _bounded(coro: Awaitable[_T]) -> _T:
        async with sem:
            return await coro

    total_raw, used_raw, prediction_raw = await asyncio.gather(
        _bounded(provider.query_metrics(query=total_query, start=start, end=end, step=step)),
        _bounded(provider.query_metrics(query=used_query, start=start, end=end, step=step)),
        _bounded(provider.query_instant(query=prediction_query, time=end)),
    )

    inputs = CapacityInputs(
        total=matrix_to_records(total_raw, total_query),
        used=matrix_to_records(used_raw, used_query),
        prediction=vector_to_records(prediction_raw, prediction_query),
    )
    log.debug(
        "fetch_capacity_inputs total=%d used=%d prediction=%d",
        len(inputs.total),
        len(inputs.used),
        len(inputs.prediction),
    )
    return inputs
