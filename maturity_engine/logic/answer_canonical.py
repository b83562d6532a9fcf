"""Canonicalization helpers for raw answer values.

Provides the single numeric coercion used by scoring and numeric visibility
comparators, plus the shared notion of "answered".
"""

from __future__ import annotations

import math
from typing import Any, Optional


def coerce_number(value: Any) -> Optional[float]:
    """Return a float for a numeric-like answer, else None.

    - Booleans -> 1.0 / 0.0
    - int/float -> float (NaN and infinities -> None)
    - Strings   -> parsed float when the whole string is numeric
    - Anything else (lists, None, objects) -> None
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            f = float(value)
        except OverflowError:
            return None
        return f if math.isfinite(f) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            f = float(text)
        except ValueError:
            return None
        return f if math.isfinite(f) else None
    return None


def is_answered(value: Any) -> bool:
    """Return True when a stored answer counts as present (non-null)."""
    return value is not None


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that does not conflate booleans with numbers (True != 1)."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


__all__ = ["coerce_number", "is_answered", "strict_equals"]
