"""
Shared utilities for API route modules: cached per-tenant data source
providers and their shutdown.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datasources.data_config import DataSourceSettings
from datasources.provider import DataSourceProvider
from config import settings


_providers: dict[str, DataSourceProvider] = {}


def get_provider(tenant_id: str) -> DataSourceProvider:
    resolved_tenant_id = tenant_id or settings.default_tenant_id
    provider = _providers.get(resolved_tenant_id)
    if provider is None:
        provider = DataSourceProvider(tenant_id=resolved_tenant_id, settings=DataSourceSettings())
        _providers[resolved_tenant_id] = provider
    return provider


async def close_providers() -> None:

    providers = list(_providers.values())
    _providers.clear()
    for provider in providers:
        await provider.aclose()
