"""
Lenient coercion helpers for store rows.

Rows coming back from the store may miss columns or carry strings where
numbers are expected; these helpers never raise.
"""
import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """
    Convert a value to a finite number.

    Examples:
        >>> to_number("42")
        42.0
        >>> to_number("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_text(value: Any) -> str:
    """Convert a value to a stripped string ("" for missing values)."""
    if value is None:
        return ""
    return str(value).strip()


def to_optional_text(value: Any) -> Optional[str]:
    """Like to_text, but returns None instead of an empty string."""
    text = to_text(value)
    return text or None


def same_text(a: Any, b: Any) -> bool:
    """Case-insensitive equality of two loosely typed values."""
    return to_text(a).lower() == to_text(b).lower()
