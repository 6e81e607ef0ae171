"""
Error taxonomy for the capacity projection core. Every failure is raised before
any output is produced; the only non-fatal condition, a used-capacity point
without a matching backbone day, is reported as a PartialJoinWarning record on
the projected series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass


class ProjectionError(Exception):
    pass


class ConfigurationError(ProjectionError):
    pass


class EmptyInputError(ProjectionError):
    pass


class MissingPredictionError(ProjectionError):
    pass


class AnchorUnavailableError(ProjectionError):
    pass


class SeriesShapeError(ProjectionError):
    pass


class DuplicateLabelError(SeriesShapeError):
    pass


@dataclass(frozen=True)
class PartialJoinWarning:
    label: str
    timestamp_seconds: int
    value: float
