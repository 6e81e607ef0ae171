"""
Provider for the tenant's metrics connector, answering range and instant
queries against the configured backend.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from typing import Dict, Any, Optional
from .data_config import DataSourceSettings
from .factory import DataSourceFactory


class DataSourceProvider:
    def __init__(self, tenant_id: str, settings: DataSourceSettings):
        self.tenant_id = tenant_id
        self.settings = settings
        self.metrics = DataSourceFactory.create_metrics(settings, tenant_id)

    async def query_metrics(self, query: str, start: int, end: int, step: str) -> Dict[str, Any]:
        return await self.metrics.query_range(query=query, start=start, end=end, step=step)

    async def query_instant(self, query: str, time: Optional[int] = None) -> Dict[str, Any]:
        return await self.metrics.query(query=query, time=time)

    async def aclose(self) -> None:
        await self.metrics.aclose()
