"""
Route-level tests for the storage forecast endpoint: error translation and the
serialized point shape consumed by the chart.
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

import main as app_main
from api.requests import StorageForecastRequest
from api.routes import forecast as forecast_route
from datasources.exceptions import DataSourceUnavailable, InvalidQuery
from engine.fetcher import CapacityInputs
from engine.projection import ConfigurationError, EmptyInputError
from services import forecast_service

DAY = 86400
JAN_1 = 1704067200


def _req() -> StorageForecastRequest:
    return StorageForecastRequest(tenant_id="t1", start=JAN_1, end=JAN_1 + DAY)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, status",
    [
        (ConfigurationError("no horizon"), 422),
        (EmptyInputError("empty"), 422),
        (DataSourceUnavailable("mimir down"), 502),
        (InvalidQuery("bad query"), 502),
        (RuntimeError("boom"), 500),
    ],
)
async def test_storage_forecast_route_maps_errors(monkeypatch, exc, status):
    async def fake_build(provider, req):
        raise exc

    monkeypatch.setattr(forecast_route, "get_provider", lambda tenant_id: object())
    monkeypatch.setattr(forecast_route, "build_storage_forecast", fake_build)

    with pytest.raises(HTTPException) as info:
        await forecast_route.storage_forecast(_req())
    assert info.value.status_code == status
    assert info.value.detail == str(exc)


def test_storage_forecast_http_payload(monkeypatch):
    async def fake_fetch(provider, total_query, used_query, prediction_query, start, end, step):
        return CapacityInputs(
            total=[{"beginTimeSeconds": JAN_1, "value": 100}, {"beginTimeSeconds": JAN_1 + DAY, "value": 95}],
            used=[{"beginTimeSeconds": JAN_1, "value": 40}, {"beginTimeSeconds": JAN_1 + DAY, "value": 50}],
            prediction=[{"beginTimeSeconds": JAN_1 + DAY, "value": 130}],
        )

    monkeypatch.setattr(forecast_route, "get_provider", lambda tenant_id: object())
    monkeypatch.setattr(forecast_service, "fetch_capacity_inputs", fake_fetch)

    client = TestClient(app_main.app)
    resp = client.post(
        "/api/v1/forecast/storage",
        json={
            "tenant_id": "t1",
            "start": JAN_1,
            "end": JAN_1 + 2 * DAY,
            "prediction_query": "SELECT predictLinear(host.diskUsedBytes, 2 days) FROM Metric",
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["points"] == [
        {"label": "2024-01-01", "name": "2024-01-01", "available": 100.0, "used": 40.0},
        {"label": "2024-01-02", "name": "2024-01-02", "available": 95.0, "used": 50.0, "prediction": 50.0},
        {"label": "2024-01-03", "name": "2024-01-03", "prediction": 90.0},
        {"label": "2024-01-04", "name": "2024-01-04", "prediction": 130.0},
    ]
    assert [s["name"] for s in body["series"]] == ["Available Storage", "Actuals", "Forecast"]


def test_storage_forecast_rejects_inverted_window():
    client = TestClient(app_main.app)
    resp = client.post(
        "/api/v1/forecast/storage",
        json={"tenant_id": "t1", "start": JAN_1 + DAY, "end": JAN_1},
    )
    assert resp.status_code == 422


def test_health_route():
    client = TestClient(app_main.app)
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
