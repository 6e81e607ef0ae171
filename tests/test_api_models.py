"""
Tests for response model serialization.
"""

from __future__ import annotations

import numpy as np

from api.responses import ChartSeries, ForecastPoint, StorageForecastResponse


def test_forecast_point_omits_unknown_fields():
    point = ForecastPoint(label="2024-01-03", name="2024-01-03", prediction=90.0)
    assert point.model_dump() == {"label": "2024-01-03", "name": "2024-01-03", "prediction": 90.0}


def test_response_coerces_numpy_numbers():
    resp = StorageForecastResponse(
        tenant_id="t",
        unit="GB",
        timezone="UTC",
        horizon_days=1,
        anchor_label="2024-01-02",
        anchor_value=np.float64(50.0),
        step_per_day=np.float64(80.0),
        points=[ForecastPoint(label="2024-01-02", name="2024-01-02", used=50.0, prediction=50.0)],
        series=[ChartSeries(key="prediction", name="Forecast", kind="line", color="#ff7300")],
    )
    dumped = resp.model_dump(mode="json")
    assert dumped["anchor_value"] == 50.0
    assert dumped["series"][0] == {"key": "prediction", "name": "Forecast", "kind": "line", "color": "#ff7300"}
    assert dumped["points"][0] == {"label": "2024-01-02", "name": "2024-01-02", "used": 50.0, "prediction": 50.0}
    assert dumped["dropped_points"] == []
