"""
Tests for the Prometheus-compatible metrics connectors: endpoint paths, query
parameters, tenant header and retry on transient failures.
"""

from __future__ import annotations

import pytest

import connectors.mimir as mimir_mod
import connectors.victoria as victoria_mod
from connectors.mimir import MimirConnector
from connectors.victoria import VictoriaMetricsConnector
from datasources.exceptions import DataSourceUnavailable, InvalidQuery


def _recorder(calls, fail_times=0, exc=DataSourceUnavailable):
    async def fake_fetch_json(url, params=None, headers=None, timeout=30, **kwargs):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if len(calls) <= fail_times:
            raise exc("transient")
        return {"status": "success", "data": {"result": []}}
    return fake_fetch_json


@pytest.mark.asyncio
async def test_mimir_range_query(monkeypatch):
    calls = []
    monkeypatch.setattr(mimir_mod, "fetch_json", _recorder(calls))
    conn = MimirConnector("http://mimir:9009/", "tenant-a", timeout=7, headers={"X-Extra": "1"})

    await conn.query_range("up", 10, 20, "1d")

    assert calls[0]["url"] == "http://mimir:9009/prometheus/api/v1/query_range"
    assert calls[0]["params"] == {"query": "up", "start": 10, "end": 20, "step": "1d"}
    assert calls[0]["headers"] == {"X-Extra": "1", "X-Scope-OrgID": "tenant-a"}
    assert calls[0]["timeout"] == 7


@pytest.mark.asyncio
async def test_mimir_instant_query_with_and_without_time(monkeypatch):
    calls = []
    monkeypatch.setattr(mimir_mod, "fetch_json", _recorder(calls))
    conn = MimirConnector("http://mimir", "t")

    await conn.query("predict_linear(x[1d], 86400)", time=99)
    await conn.query("vector(1)")

    assert calls[0]["url"] == "http://mimir/prometheus/api/v1/query"
    assert calls[0]["params"] == {"query": "predict_linear(x[1d], 86400)", "time": 99}
    assert calls[1]["params"] == {"query": "vector(1)"}


@pytest.mark.asyncio
async def test_victoria_paths(monkeypatch):
    calls = []
    monkeypatch.setattr(victoria_mod, "fetch_json", _recorder(calls))
    conn = VictoriaMetricsConnector("http://vm:8428", "t")

    await conn.query_range("up", 1, 2, "1d")
    await conn.query("up", time=2)

    assert [c["url"] for c in calls] == [
        "http://vm:8428/api/v1/query_range",
        "http://vm:8428/api/v1/query",
    ]


@pytest.mark.asyncio
async def test_connector_retries_unavailable_backend(monkeypatch):
    calls = []
    monkeypatch.setattr(mimir_mod, "fetch_json", _recorder(calls, fail_times=1))

    async def no_sleep(_):
        return None

    monkeypatch.setattr("datasources.retry.asyncio.sleep", no_sleep)
    conn = MimirConnector("http://mimir", "t")
    resp = await conn.query_range("up", 1, 2, "1d")

    assert resp["status"] == "success"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_connector_does_not_retry_invalid_query(monkeypatch):
    calls = []
    monkeypatch.setattr(mimir_mod, "fetch_json", _recorder(calls, fail_times=5, exc=InvalidQuery))
    conn = MimirConnector("http://mimir", "t")

    with pytest.raises(InvalidQuery):
        await conn.query("bad(")
    assert len(calls) == 1
