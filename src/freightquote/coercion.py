"""
Input coercion for pricing fields.

Form inputs arrive as whatever the widget produced: numbers, numeric
strings, empty strings, ``None``. Pricing never rejects them; anything
that is not a finite number becomes ``0``.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import TypeAdapter, ValidationError

_FLOAT = TypeAdapter(float)
_BOOL = TypeAdapter(bool)


def to_number(value: Any) -> float:
    """Coerce *value* to a finite float, falling back to ``0.0``."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        number = _FLOAT.validate_python(value)
    except ValidationError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_non_negative(value: Any) -> float:
    """Coerce a physical quantity or cost. Negative values clamp to ``0.0``."""
    return max(0.0, to_number(value))


def to_flag(value: Any) -> bool:
    """Coerce a checkbox-style value to ``bool``; unknown input is ``False``."""
    try:
        return _BOOL.validate_python(value)
    except ValidationError:
        return False
