"""
Settings for the metrics data source used to answer capacity queries.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings
from config import (
    METRICS_BACKEND_MIMIR,
    METRICS_BACKEND_VICTORIAMETRICS,
    STORECAST_METRICS_BACKEND,
    STORECAST_METRICS_MIMIR_URL,
    STORECAST_METRICS_VICTORIAMETRICS_URL,
    STORECAST_CONNECTOR_TIMEOUT,
    STORECAST_STARTUP_TIMEOUT,
)


class DataSourceSettings(BaseSettings):
    metrics_backend: str = STORECAST_METRICS_BACKEND
    mimir_url: str = STORECAST_METRICS_MIMIR_URL
    victoriametrics_url: Optional[str] = STORECAST_METRICS_VICTORIAMETRICS_URL
    connector_timeout: int = STORECAST_CONNECTOR_TIMEOUT
    startup_timeout: int = STORECAST_STARTUP_TIMEOUT

    @field_validator("mimir_url", "victoriametrics_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return str(v).rstrip("/") if v is not None else v

    @field_validator("metrics_backend", mode="before")
    @classmethod
    def validate_metrics_backend(cls, v: str) -> str:
        value = str(v or "").strip().lower()
        if value not in {METRICS_BACKEND_MIMIR, METRICS_BACKEND_VICTORIAMETRICS}:
            raise ValueError(f"Unsupported metrics backend: {value!r}")
        return value

    model_config = {"env_prefix": "STORECAST_", "extra": "ignore"}
