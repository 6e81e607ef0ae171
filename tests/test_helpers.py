"""
Test Suite for Helper Functions

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
import httpx

from datasources.helpers import fetch_json
from datasources.exceptions import InvalidQuery, QueryTimeout, DataSourceUnavailable


class DummyResponse:
    def __init__(self, status_code=200, text="", json_data=None):
        self.status_code = status_code
        self.text = text
        self._json = json_data or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("err", request=None, response=self)

    def json(self):
        return self._json


class DummyClient:
    def __init__(self, resp: DummyResponse):
        self.resp = resp
        self.seen = {}

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None, headers=None):
        self.seen = {"url": url, "params": params, "headers": headers}
        return self.resp


@pytest.mark.asyncio
async def test_fetch_json_success(monkeypatch):
    resp = DummyResponse(status_code=200, json_data={"status": "success", "data": {}})
    client = DummyClient(resp)
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    got = await fetch_json("url", params={"query": "up"}, headers={"X-Scope-OrgID": "t"})
    assert got == {"status": "success", "data": {}}
    assert client.seen["params"] == {"query": "up"}


@pytest.mark.asyncio
async def test_fetch_json_http_error(monkeypatch):
    resp = DummyResponse(status_code=400, text="bad_data")
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: DummyClient(resp))
    with pytest.raises(InvalidQuery):
        await fetch_json("url")


@pytest.mark.asyncio
async def test_fetch_json_error_status_in_body(monkeypatch):
    resp = DummyResponse(json_data={"status": "error", "errorType": "bad_data", "error": "parse error"})
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: DummyClient(resp))
    with pytest.raises(InvalidQuery, match="parse error"):
        await fetch_json("url")


@pytest.mark.asyncio
async def test_fetch_json_timeout(monkeypatch):
    async def get(*args, **kwargs):
        raise httpx.TimeoutException("timeout")
    client = DummyClient(DummyResponse())
    client.get = get
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    with pytest.raises(QueryTimeout):
        await fetch_json("url")


@pytest.mark.asyncio
async def test_fetch_json_unreachable(monkeypatch):
    async def get(*args, **kwargs):
        raise httpx.ConnectError("refused")
    client = DummyClient(DummyResponse())
    client.get = get
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    with pytest.raises(DataSourceUnavailable):
        await fetch_json("http://mimir/prometheus/api/v1/query")
