"""
Mimir Connector

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Any, Dict, Optional

from datasources.base import MetricsConnector
from datasources.exceptions import DataSourceUnavailable, QueryTimeout
from datasources.helpers import fetch_json
from datasources.retry import retry
from config import HEALTH_PATH, DATASOURCE_TIMEOUT

API_PREFIX = "/prometheus/api/v1"


class MimirConnector(MetricsConnector):
    health_path = HEALTH_PATH

    def __init__(
        self,
        base_url: str,
        tenant_id: str,
        timeout: int = DATASOURCE_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(tenant_id, base_url, timeout, headers)

    @retry(attempts=3, delay=0.5, backoff=2.0, exceptions=(DataSourceUnavailable, QueryTimeout))
    async def query_range(
        self,
        query: str,
        start: int,
        end: int,
        step: str,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{API_PREFIX}/query_range"
        params: Dict[str, Any] = {"query": query, "start": start, "end": end, "step": step}
        return await fetch_json(
            url,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
            invalid_msg="Mimir query failed",
            timeout_msg="Mimir query timed out",
            unavailable_msg="Cannot reach Mimir at",
        )

    @retry(attempts=3, delay=0.5, backoff=2.0, exceptions=(DataSourceUnavailable, QueryTimeout))
    async def query(self, query: str, time: Optional[int] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{API_PREFIX}/query"
        params: Dict[str, Any] = {"query": query}
        if time is not None:
            params["time"] = time
        return await fetch_json(
            url,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
            invalid_msg="Mimir query failed",
            timeout_msg="Mimir query timed out",
            unavailable_msg="Cannot reach Mimir at",
        )
