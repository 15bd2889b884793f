"""Normalization helpers.

Centralizes defensive parsing and placeholder handling.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(result):
        return None
    return result


def finite_float(value: Any) -> float | None:
    """Like :func:`safe_float` but also rejects ``inf`` / ``-inf``."""
    parsed = safe_float(value)
    if parsed is None or not math.isfinite(parsed):
        return None
    return parsed


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's built-in :func:`round` rounds halves to even; scores and fleet
    averages use the conventional half-up rule instead.
    """
    return math.floor(value + 0.5)
