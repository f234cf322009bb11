"""
Rule resolution and ranking services.

Provides modular components for:
- Numeric range parsing and room name classification
- Synonym expansion for search terms
- Property rule, budget tier and sizing rule resolution
- Room-scoped catalog suggestions
"""

from .cache import TTLCache, CacheEntry
from .ranges import parse_range
from .rooms import parse_room_name, ROOM_TYPES
from .synonyms import get_synonyms, expand_user_text, expand_keywords, expand_query
from .property_rules import PropertyRulesService, ITEM_CATEGORY_MAP, match_subtype
from .rules import SizingRulesService
from .catalog import CatalogService, ROOM_DEFAULTS

__all__ = [
    'TTLCache',
    'CacheEntry',
    'parse_range',
    'parse_room_name',
    'ROOM_TYPES',
    'get_synonyms',
    'expand_user_text',
    'expand_keywords',
    'expand_query',
    'PropertyRulesService',
    'ITEM_CATEGORY_MAP',
    'match_subtype',
    'SizingRulesService',
    'CatalogService',
    'ROOM_DEFAULTS',
]
