"""
Forecast horizon parsing from the prediction query text.

The horizon is carried by a linear prediction call embedded in the query,
either the NRQL form ``predictLinear(<metric>, <N> days)`` or the PromQL form
``predict_linear(<range vector>, <seconds>)``. The call is located, its
arguments are split on the top-level comma (brackets and quoted strings inside
the metric argument are skipped), and the amount argument is read as an
integer followed by an optional unit.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from engine.projection.errors import ConfigurationError

SECONDS_PER_DAY = 86400

_CALL_RE = re.compile(r"\b(predictLinear|predict_linear)\s*\(", re.IGNORECASE)
_AMOUNT_RE = re.compile(r"^(\d+)\s*([A-Za-z]*)$")
_OPEN = {"(": ")", "[": "]", "{": "}"}
_CLOSE = {v: k for k, v in _OPEN.items()}

_DAY_UNITS = {"d", "day", "days"}
_SECOND_UNITS = {"s", "sec", "secs", "second", "seconds"}


@dataclass(frozen=True)
class HorizonSpec:
    function: str
    metric: str
    amount: int
    unit: str

    @property
    def days(self) -> int:
        if self.unit == "days":
            return self.amount
        return self.amount // SECONDS_PER_DAY


def _split_call(text: str, start: int) -> Tuple[List[str], int]:
    """Split the arguments of the call whose ``(`` sits at ``start``.

    Returns the raw argument strings and the index of the closing paren.
    """
    stack: List[str] = ["("]
    args: List[str] = []
    quote: Optional[str] = None
    arg_start = start + 1
    i = start + 1
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch in _OPEN:
            stack.append(ch)
        elif ch in _CLOSE:
            if not stack or stack[-1] != _CLOSE[ch]:
                raise ConfigurationError(f"unbalanced {ch!r} at position {i}")
            stack.pop()
            if not stack:
                args.append(text[arg_start:i])
                return args, i
        elif ch == "," and len(stack) == 1:
            args.append(text[arg_start:i])
            arg_start = i + 1
        i += 1
    raise ConfigurationError("prediction call is not closed")


def _normalize_unit(function: str, unit: str) -> str:
    unit = unit.lower()
    if unit in _DAY_UNITS:
        return "days"
    if unit in _SECOND_UNITS:
        return "seconds"
    if not unit and function == "predict_linear":
        return "seconds"
    if not unit:
        raise ConfigurationError(f"{function} horizon needs a unit, e.g. '90 days'")
    raise ConfigurationError(f"unsupported horizon unit: {unit!r}")


def parse_horizon(text: Optional[str]) -> HorizonSpec:
    text = str(text or "")
    match = _CALL_RE.search(text)
    if not match:
        raise ConfigurationError("no predictLinear(...) call found in prediction query")

    function = match.group(1)
    canonical = "predict_linear" if "_" in function else "predictLinear"
    args, _ = _split_call(text, match.end() - 1)
    if len(args) != 2:
        raise ConfigurationError(f"{function} expects 2 arguments, got {len(args)}")

    metric = args[0].strip()
    if not metric:
        raise ConfigurationError(f"{function} is missing its metric argument")

    amount_match = _AMOUNT_RE.match(args[1].strip())
    if not amount_match:
        raise ConfigurationError(f"invalid horizon amount: {args[1].strip()!r}")

    amount = int(amount_match.group(1))
    unit = _normalize_unit(canonical, amount_match.group(2))
    if unit == "seconds" and amount % SECONDS_PER_DAY:
        raise ConfigurationError(f"horizon of {amount}s is not a whole number of days")

    return HorizonSpec(function=canonical, metric=metric, amount=amount, unit=unit)
