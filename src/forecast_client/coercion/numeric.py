"""Numeric coercion boundary for untrusted wire values.

The forecast service may serialize numerics as strings (JSON float precision),
as null, or omit them entirely. Everything downstream of this module assumes
clean finite floats, so all parsing goes through here.

Rules:
- int/float pass through when finite
- plain decimal strings ("12", "-3.5", "1e3") are parsed; surrounding
  whitespace is ignored, digit separators ("1_000") and non-ASCII digits are not
- None, empty strings, booleans, NaN and +/-inf are treated as absent
- nothing in this module raises
"""

from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any

# Thousands separators / spaces typed or pasted into the exogenous grid.
_GRID_NOISE_RE = re.compile(r"[,\s]")

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def to_number_optional(value: Any) -> float | None:
    """Return a finite float, or None when ``value`` is not a usable number."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Real):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.fullmatch(text):
            return None
        number = float(text)
    else:
        return None

    return number if math.isfinite(number) else None


def to_number_required(value: Any, fallback: float = 0.0) -> float:
    """Like :func:`to_number_optional` but returns ``fallback`` instead of None."""
    number = to_number_optional(value)
    return fallback if number is None else number


def to_number_or_zero(value: Any) -> float:
    """Parse a user-edited grid cell.

    Cells come from keyboard input or pasted CSV, so thousands commas and
    spaces are stripped first ("13,000,000" -> 13000000.0).
    """
    if isinstance(value, str):
        value = _GRID_NOISE_RE.sub("", value)
    return to_number_required(value, 0.0)


def is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and to_number_optional(value) is not None
