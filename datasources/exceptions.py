"""
Exceptions raised by metrics data source connectors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class DataSourceError(Exception):
    pass


class DataSourceUnavailable(DataSourceError):
    pass


class QueryTimeout(DataSourceError):
    pass


class InvalidQuery(DataSourceError):
    pass


class BackendStartupTimeout(DataSourceError):
    pass
