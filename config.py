"""
Constants and configuration for Storecast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Tuple

from pydantic_settings import BaseSettings


METRICS_BACKEND_MIMIR = "mimir"
METRICS_BACKEND_VICTORIAMETRICS = "victoriametrics"

STORECAST_METRICS_BACKEND = os.getenv("STORECAST_METRICS_BACKEND", METRICS_BACKEND_MIMIR).lower()
STORECAST_METRICS_MIMIR_URL = os.getenv("STORECAST_METRICS_MIMIR_URL", "http://mimir:9009").rstrip("/")
STORECAST_METRICS_VICTORIAMETRICS_URL = os.getenv("STORECAST_METRICS_VICTORIAMETRICS_URL", "").rstrip("/")

STORECAST_CONNECTOR_TIMEOUT = int(os.getenv("STORECAST_CONNECTOR_TIMEOUT", "30"))
STORECAST_STARTUP_TIMEOUT = int(os.getenv("STORECAST_STARTUP_TIMEOUT", "120"))

# tenant defaults
STORECAST_DEFAULT_TENANT_ID = os.getenv("STORECAST_DEFAULT_TENANT_ID", "anonymous")

DATASOURCE_TIMEOUT = 30
HEALTH_PATH = "/ready"

# default capacity queries (node_exporter root filesystem, in GB)
DEFAULT_TOTAL_QUERY = 'max(node_filesystem_size_bytes{mountpoint="/"}) / 1e9'
DEFAULT_USED_QUERY = (
    'max(node_filesystem_size_bytes{mountpoint="/"} - node_filesystem_avail_bytes{mountpoint="/"}) / 1e9'
)
DEFAULT_PREDICTION_QUERY = (
    'max(predict_linear((node_filesystem_size_bytes{mountpoint="/"}'
    ' - node_filesystem_avail_bytes{mountpoint="/"})[30d:1d], 7776000)) / 1e9'
)

# chart series: key -> (display name, kind, colour)
CHART_SERIES: Dict[str, Tuple[str, str, str]] = {
    "available": ("Available Storage", "area", "#038cfc"),
    "used": ("Actuals", "area", "#89CFF0"),
    "prediction": ("Forecast", "line", "#ff7300"),
}


class Settings(BaseSettings):
    metrics_backend: str = STORECAST_METRICS_BACKEND
    mimir_url: str = STORECAST_METRICS_MIMIR_URL
    victoriametrics_url: str = STORECAST_METRICS_VICTORIAMETRICS_URL

    connector_timeout: int = STORECAST_CONNECTOR_TIMEOUT
    startup_timeout: int = STORECAST_STARTUP_TIMEOUT

    default_tenant_id: str = STORECAST_DEFAULT_TENANT_ID

    default_total_query: str = DEFAULT_TOTAL_QUERY
    default_used_query: str = DEFAULT_USED_QUERY
    default_prediction_query: str = DEFAULT_PREDICTION_QUERY

    # projection defaults
    forecast_timezone: str = "UTC"
    forecast_label_format: str = "%Y-%m-%d"
    forecast_default_step: str = "1d"
    forecast_default_lookback_days: int = 30
    forecast_max_horizon_days: int = 3650
    chart_unit: str = "GB"

    # gateway tuning
    gateway_max_parallel_queries: int = 3

    ssl_enabled: bool = False
    ssl_certfile: str = ""
    ssl_keyfile: str = ""

    chart_series_order: List[str] = ["available", "used", "prediction"]

    model_config = {
        "env_prefix": "STORECAST_",
        "extra": "ignore",
    }


settings = Settings()
