"""
Classification of free-text room labels ("Master Bedroom", "attached bath")
into a canonical room type and subtype.
"""
from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from ..models import RoomClassification

ROOM_TYPES = (
    'bedroom', 'bathroom', 'living', 'kitchen', 'dining',
    'balcony', 'foyer', 'study', 'utility', 'garden',
)

# Subtype patterns, checked in order; first hit wins
BEDROOM_SUBTYPES: List[Tuple[str, str]] = [
    (r'master', 'master'),
    (r'guest', 'guest'),
    (r'kids?', 'kids'),
]

BATHROOM_SUBTYPES: List[Tuple[str, str]] = [
    (r'attached|ensuite|en-suite', 'attached'),
    (r'common|shared', 'common'),
    (r'powder', 'powder'),
]

# Room types without subtypes
FLAT_ROOM_PATTERNS: List[Tuple[str, str]] = [
    (r'living|lounge|hall', 'living'),
    (r'kitchen', 'kitchen'),
    (r'dining', 'dining'),
    (r'balcony', 'balcony'),
    (r'foyer|entry|entrance', 'foyer'),
    (r'study|office', 'study'),
    (r'utility|laundry', 'utility'),
    (r'garden', 'garden'),
]


def _first_subtype(text: str, patterns: List[Tuple[str, str]]) -> Optional[str]:
    for pattern, subtype in patterns:
        if re.search(pattern, text):
            return subtype
    return None


def parse_room_name(name: Any) -> RoomClassification:
    """
    Classify a room label.

    Bedrooms are checked first, then bathrooms, then the flat room types.
    Unrecognized labels pass through as their trimmed lowercase text so
    callers can still attempt a rule lookup.

    Examples:
        >>> parse_room_name("Master Bedroom")
        RoomClassification(type='bedroom', subtype='master')
        >>> parse_room_name("garage")
        RoomClassification(type='garage', subtype=None)
    """
    text = str(name or '').lower().strip()
    if not text:
        return RoomClassification()

    if re.search(r'bedroom', text):
        return RoomClassification('bedroom', _first_subtype(text, BEDROOM_SUBTYPES))

    if re.search(r'bathroom|bath', text):
        return RoomClassification('bathroom', _first_subtype(text, BATHROOM_SUBTYPES))

    for pattern, room_type in FLAT_ROOM_PATTERNS:
        if re.search(pattern, text):
            return RoomClassification(room_type, None)

    return RoomClassification(text, None)
