"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
uncaught exceptions into :class:`fastapi.HTTPException` responses.
HTTPExceptions raised by the handler propagate untouched. Projection errors
(bad horizon, empty or malformed series, missing prediction) become ``422``,
data source failures become ``502`` and anything else becomes ``500``, each
with the exception message as the response detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

from datasources.exceptions import DataSourceError
from engine.projection.errors import ProjectionError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def status_for(exc: Exception) -> int:
    if isinstance(exc, ProjectionError):
        return 422
    if isinstance(exc, DataSourceError):
        return 502
    return 500


def _translate(func: Callable[..., Any], exc: Exception) -> HTTPException:
    code = status_for(exc)
    if code >= 500:
        log.warning("%s failed with %s: %s", func.__name__, type(exc).__name__, exc)
    return HTTPException(status_code=code, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async functions.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _translate(func, exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _translate(func, exc) from exc

    return cast(F, sync_wrapper)
