"""
Utility modules for roomrules.
"""
from .coerce import to_number, to_text, to_optional_text, same_text
from .text_cleaning import (
    normalize_whitespace,
    normalize_dashes,
    hyphens_and_quotes_to_spaces,
    searchable_text,
    dedupe_preserve_order,
)

__all__ = [
    "to_number",
    "to_text",
    "to_optional_text",
    "same_text",
    "normalize_whitespace",
    "normalize_dashes",
    "hyphens_and_quotes_to_spaces",
    "searchable_text",
    "dedupe_preserve_order",
]
