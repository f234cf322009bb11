"""
roomrules - rule resolution and ranking for interior-design quotations.

Resolves per-room furnishing constraints and budget tiers from property rule
tables stored in Supabase, classifies room names, expands search terms with
synonyms, and ranks catalog categories against style preferences.
"""

__version__ = "1.0.0"
__author__ = "roomrules"

from .models import NumericRange, RoomClassification, ItemConstraints, CatalogItem
from .services.property_rules import PropertyRulesService
from .services.rules import SizingRulesService
from .services.catalog import CatalogService
from .store.client import SupabaseClient

__all__ = [
    "NumericRange",
    "RoomClassification",
    "ItemConstraints",
    "CatalogItem",
    "PropertyRulesService",
    "SizingRulesService",
    "CatalogService",
    "SupabaseClient",
]
