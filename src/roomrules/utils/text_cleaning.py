"""
Text cleaning and normalization utilities.
"""
import re
from typing import Any, Iterable

# Unicode hyphens, en/em dashes, horizontal bar and the minus sign
UNICODE_DASHES = "‐‑‒–—―−"
CURLY_QUOTES = "‘’“”"

_DASH_RE = re.compile(f"[{UNICODE_DASHES}]")
_HYPHEN_RE = re.compile(f"[\\-{UNICODE_DASHES}]")
_QUOTE_RE = re.compile(f"[{CURLY_QUOTES}]")


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in text.

    Args:
        text: Text to normalize

    Returns:
        Text with normalized whitespace

    Examples:
        >>> normalize_whitespace("hello    world\\n\\ntest")
        'hello world test'
    """
    if not text:
        return ""

    text = re.sub(r'\s+', ' ', text)

    return text.strip()


def normalize_dashes(text: str) -> str:
    """
    Replace unicode dash variants with an ASCII hyphen.

    Examples:
        >>> normalize_dashes("600–850")
        '600-850'
    """
    if not text:
        return ""
    return _DASH_RE.sub("-", text)


def hyphens_and_quotes_to_spaces(text: str) -> str:
    """
    Replace every hyphen/dash (ASCII or unicode) and curly quote with a space.

    Examples:
        >>> hyphens_and_quotes_to_spaces("tv‑unit “walnut”")
        'tv unit  walnut '
    """
    if not text:
        return ""
    text = _HYPHEN_RE.sub(" ", text)
    return _QUOTE_RE.sub(" ", text)


def searchable_text(*parts: Any) -> str:
    """
    Join loosely typed fields into one lowercase haystack.

    Missing values contribute empty strings, so the field positions stay
    separated by single spaces.

    Examples:
        >>> searchable_text("Oak Table", None, "Solid WOOD")
        'oak table  solid wood'
    """
    return " ".join("" if p is None else str(p) for p in parts).lower()


def dedupe_preserve_order(values: Iterable[str]) -> list[str]:
    """Drop repeated values while keeping first-seen order."""
    seen = set()
    unique = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique
