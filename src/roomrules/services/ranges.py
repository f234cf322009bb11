"""
Parsing of free-form numeric ranges such as "600-850", "1,200 – 1,500" or "900".
"""
from __future__ import annotations

import re
from typing import Any

from ..models import NumericRange
from ..utils.coerce import to_number
from ..utils.text_cleaning import normalize_dashes

_RANGE_RE = re.compile(r'(\d+(?:\.\d+)?)(?:-(\d+(?:\.\d+)?))?')


def parse_range(raw: Any) -> NumericRange:
    """
    Parse a numeric range string.

    Thousands separators and whitespace are dropped and unicode dashes are
    treated as hyphens. Only the first number (or number pair) is used.

    Args:
        raw: Range text, a bare number, or None

    Returns:
        NumericRange; both bounds None when nothing numeric is found

    Examples:
        >>> parse_range("600-850")
        NumericRange(min=600.0, max=850.0)
        >>> parse_range("900")
        NumericRange(min=900.0, max=900.0)
        >>> parse_range("")
        NumericRange(min=None, max=None)
    """
    if raw is None:
        return NumericRange()

    text = re.sub(r'[,\s]', '', str(raw))
    text = normalize_dashes(text).lower()
    if not text:
        return NumericRange()

    match = _RANGE_RE.search(text)
    if not match:
        return NumericRange()

    low = to_number(match.group(1))
    high = to_number(match.group(2)) if match.group(2) else low

    if low is not None and high is not None and low > high:
        low, high = high, low

    return NumericRange(min=low, max=high)
