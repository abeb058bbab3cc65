from __future__ import annotations

import math
import re

"""Numeric cell handling shared by inference and expansion.

Only comma and percent stripping are supported: "1,234.5%" -> 1234.5.
"""

__all__ = [
    "looks_numeric",
    "parse_metric",
]

_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _clean(value: object) -> str:
    return str(value).replace(",", "").replace("%", "").strip()


def _to_float(value: object) -> float | None:
    if value is None:
        return None
    cleaned = _clean(value)
    if not _NUMBER.fullmatch(cleaned):
        return None
    number = float(cleaned)
    if not math.isfinite(number):
        return None
    return number


def looks_numeric(value: object) -> bool:
    return _to_float(value) is not None


def parse_metric(value: object) -> float:
    """Parse a metric cell; anything unparsable becomes 0.0."""
    number = _to_float(value)
    return 0.0 if number is None else number
