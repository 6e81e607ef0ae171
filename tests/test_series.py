"""
Test cases for capacity series normalization and prediction extraction.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import timezone

import pytest

from engine.projection import (
    ConfigurationError,
    MissingPredictionError,
    SeriesShapeError,
    TimeSeriesPoint,
    day_label,
    extract_prediction,
    normalize,
)

JAN_1 = 1704067200


def test_day_label_uses_explicit_zone():
    assert day_label(JAN_1, "UTC") == "2024-01-01"
    assert day_label(JAN_1, "Asia/Tokyo") == "2024-01-01"
    assert day_label(JAN_1, "America/Los_Angeles") == "2023-12-31"
    assert day_label(JAN_1, timezone.utc, "%b %d") == "Jan 01"


def test_unknown_zone_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        day_label(JAN_1, "Mars/Olympus_Mons")


def test_normalize_reads_named_field():
    rows = normalize([{"beginTimeSeconds": JAN_1, "endTimeSeconds": JAN_1 + 86400, "value": "12.5"}])
    assert rows == [TimeSeriesPoint(timestamp_seconds=JAN_1, label="2024-01-01", value=12.5)]


@pytest.mark.parametrize(
    "record",
    [
        {"value": 1},
        {"beginTimeSeconds": JAN_1},
        {"beginTimeSeconds": JAN_1, "value": "n/a"},
        {"beginTimeSeconds": "later", "value": 1},
        {"beginTimeSeconds": JAN_1, "value": True},
        [JAN_1, 1],
    ],
)
def test_normalize_rejects_malformed_records(record):
    with pytest.raises(SeriesShapeError):
        normalize([record])


def test_extract_prediction_single_value():
    assert extract_prediction([{"beginTimeSeconds": JAN_1, "value": 130}]) == 130.0


@pytest.mark.parametrize(
    "records",
    [
        [],
        [{"value": 1}, {"value": 2}],
        [{"prediction": 1}],
        [{"value": "soon"}],
        [{"value": float("nan")}],
    ],
)
def test_extract_prediction_requires_exactly_one_scalar(records):
    with pytest.raises(MissingPredictionError):
        extract_prediction(records)
