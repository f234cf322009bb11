"""
Synonym table and search-term expansion for catalog matching.

Expansion is additive: the caller's text is kept and synonym terms are
added next to it, never substituted into it.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..models import ExpandedQuery
from ..utils.text_cleaning import (
    dedupe_preserve_order,
    hyphens_and_quotes_to_spaces,
    normalize_whitespace,
)

SYNONYMS: Dict[str, List[str]] = {
    # Types
    'sofa': ['couch', 'settee', 'lounger', 'sofa set'],
    'coffee table': ['center table', 'centre table', 'cocktail table'],
    'side table': ['end table', 'lamp table', 'bedside table'],
    'bedside table': ['nightstand', 'night stand', 'bedside', 'bedside cabinet'],
    'tv bench': [
        'tv unit', 'tv table', 'tv stand', 'media unit', 'tv storage',
        'tv storage combination', 'tv bench with drawers', 'tv-table',
    ],
    'bookcase': ['bookshelf', 'shelving unit', 'shelf unit', 'shelving', 'kallax'],
    'wardrobe': ['closet', 'cupboard', 'almirah'],
    'cabinet': ['storage', 'cupboard'],
    'washstand': [
        'wash-stand', 'vanity', 'vanity cabinet', 'wash stand',
        'wash-stand with drawers', 'wash-stand with doors',
    ],
    'towel rack': ['towel rail', 'towel bar', 'towel-holder', 'towel holder'],

    # Materials
    'wood': ['wooden', 'solid wood'],
    'glass': ['tempered glass'],
    'leather': ['leatherette', 'faux leather'],
    'fabric': ['cloth', 'textile'],
    'metal': ['steel', 'iron'],

    # Packages / price tiers
    'premium': ['high-end'],
    'economy': ['budget', 'affordable', 'cheap'],
    'luxury': ['luxurious'],

    # Seating
    '3 seater': ['3-seater', '3 seat', 'three seater'],
    '2 seater': ['2-seater', '2 seat', 'two seater'],

    # Subtypes
    'dining table': ['dinner table'],
}

# Phrases whose synonyms get appended to free text
EXPANDABLE_PHRASES = [
    'sofa', 'coffee table', 'side table', 'dining table', 'tv bench',
    'bookcase', 'wardrobe', 'cabinet', 'premium', 'luxury', 'economy',
    '3 seater', '2 seater',
]

TV_TABLE_TERMS = ['tv bench', 'tv unit', 'tv stand', 'media unit']


def get_synonyms(token: Optional[str]) -> List[str]:
    """
    Return the token (lowercased) followed by its aliases, de-duplicated.

    Unknown tokens come back on their own.

    Examples:
        >>> get_synonyms("Sofa")
        ['sofa', 'couch', 'settee', 'lounger', 'sofa set']
        >>> get_synonyms("unknown_term")
        ['unknown_term']
    """
    if not token:
        return []
    term = str(token).lower()
    aliases = [alias.lower() for alias in SYNONYMS.get(term, [])]
    return dedupe_preserve_order([term, *aliases])


def _normalize_free_text(text: str) -> str:
    return hyphens_and_quotes_to_spaces(str(text)).lower()


def _recognized_terms(lower: str) -> List[str]:
    terms: List[str] = []
    for phrase in EXPANDABLE_PHRASES:
        if phrase in lower:
            terms.extend(get_synonyms(phrase))
    # "tv-table" is already "tv table" once hyphens are spaces
    if 'tv table' in lower:
        terms.extend(TV_TABLE_TERMS)
    return terms


def expand_user_text(text: Optional[str]) -> str:
    """
    Append synonyms of recognized phrases to the end of the text.

    Hyphens, dashes and curly quotes are turned into spaces before matching.

    Examples:
        >>> expand_user_text("Need a sofa")
        'need a sofa sofa couch settee lounger sofa set'
    """
    if not text:
        return ''
    lower = _normalize_free_text(text)
    terms = _recognized_terms(lower)
    if not terms:
        return lower
    return lower + ' ' + ' '.join(terms)


def expand_query(text: Optional[str]) -> ExpandedQuery:
    """
    Parse free text into an ExpandedQuery carrying its synonym terms as a set.

    Unlike expand_user_text, nothing is concatenated, so a synonym cannot
    accidentally form a new phrase with its neighbours.
    """
    if not text:
        return ExpandedQuery(text='')
    lower = _normalize_free_text(text)
    terms = _recognized_terms(lower)
    return ExpandedQuery(text=normalize_whitespace(lower), terms=frozenset(terms))


def expand_keywords(keywords: Optional[Iterable[str]]) -> List[str]:
    """
    Union of the synonym sets of every keyword, without duplicates.

    Examples:
        >>> expand_keywords(["wood", "wooden"])
        ['wood', 'wooden', 'solid wood']
    """
    out: List[str] = []
    for keyword in keywords or []:
        out.extend(get_synonyms(keyword))
    return dedupe_preserve_order(out)
