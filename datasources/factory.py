"""
Factory for creating the metrics connector based on configuration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from connectors.mimir import MimirConnector
from connectors.victoria import VictoriaMetricsConnector


class DataSourceFactory:

    @staticmethod
    def create_metrics(config, tenant_id):
        from config import METRICS_BACKEND_MIMIR, METRICS_BACKEND_VICTORIAMETRICS

        timeout = config.connector_timeout
        if config.metrics_backend == METRICS_BACKEND_MIMIR:
            return MimirConnector(config.mimir_url, tenant_id, timeout=timeout)
        if config.metrics_backend == METRICS_BACKEND_VICTORIAMETRICS:
            if not config.victoriametrics_url:
                raise ValueError("VictoriaMetrics backend selected but no URL configured")
            return VictoriaMetricsConnector(config.victoriametrics_url, tenant_id, timeout=timeout)
        raise ValueError("Unsupported metrics backend")
