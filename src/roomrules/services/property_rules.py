"""
Property rule resolution: per-room item constraints and budget tiers.

Rule tables (``size_and_pricing``, ``rules_for_apartment``,
``rules_for_villa``) are loaded in parallel and each cached for
``Config.RULES_CACHE_TTL_S`` seconds.

Configuration matching is by substring: a query for "2 BHK" matches any row
whose configuration contains "2 bhk". Rows without a room or item subtype
apply to every subtype.
"""
from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional

from ..config import Config
from ..logger import get_logger
from ..models import (
    ItemConstraints,
    PropertyRuleRow,
    PropertyRuleSet,
    SizePricingRow,
    SubtypeMatch,
)
from ..store.client import SupabaseClient
from ..utils.coerce import same_text, to_number, to_text
from .cache import TTLCache
from .rooms import parse_room_name

logger = get_logger(__name__)

SIZE_PRICING_TABLE = 'size_and_pricing'
APARTMENT_RULES_TABLE = 'rules_for_apartment'
VILLA_RULES_TABLE = 'rules_for_villa'
RULE_TABLES = (SIZE_PRICING_TABLE, APARTMENT_RULES_TABLE, VILLA_RULES_TABLE)

# Planner item types -> catalog/rule item categories
ITEM_CATEGORY_MAP: Dict[str, str] = {
    'sofa': 'Sofa',
    'sofa_bed': 'Sofa-bed',
    'tv_bench': 'Tv-bench',
    'table': 'Table',
    'chair': 'Chair',
    'bed': 'Bed',
    'wardrobe': 'Wardrobe',
    'mirror': 'Mirror',
    'cabinet': 'Cabinet',
    'bookcase': 'Bookcase',
    'shelf': 'Shelf',
    'lamp': 'Lamp',
    'washstand': 'Wash-stand',
}

BUDGET_TIERS = ('economy', 'premium', 'luxury')


def configuration_label(bhk: Any) -> Optional[str]:
    """
    Lowercased configuration label for a BHK count, or None for no BHK.

    Any falsy BHK (None, "", 0) means no configuration filter.

    Examples:
        >>> configuration_label(2)
        '2 bhk'
        >>> configuration_label(3.0)
        '3 bhk'
    """
    if not bhk:
        return None
    if isinstance(bhk, float) and bhk.is_integer():
        bhk = int(bhk)
    return f"{bhk} BHK".lower()


def configuration_matches(row_configuration: Any, label: Optional[str]) -> bool:
    """No label matches everything; otherwise substring containment."""
    return not label or label in to_text(row_configuration).lower()


def match_subtype(query: Any, row_value: Any) -> SubtypeMatch:
    """
    Compare a queried subtype with a rule row's subtype.

    A missing value on either side is a wildcard.

    Examples:
        >>> match_subtype("master", None)
        <SubtypeMatch.WILDCARD: 'wildcard'>
        >>> match_subtype("master", "Master")
        <SubtypeMatch.EXACT: 'exact'>
        >>> match_subtype("master", "guest")
        <SubtypeMatch.MISMATCH: 'mismatch'>
    """
    if not to_text(query) or not to_text(row_value):
        return SubtypeMatch.WILDCARD
    if same_text(query, row_value):
        return SubtypeMatch.EXACT
    return SubtypeMatch.MISMATCH


class PropertyRulesService:
    """
    Resolves sizing/pricing rows, room rules and item constraints.

    Args:
        client: Store client used to read the rule tables
        ttl_seconds: Cache lifetime (defaults to Config.RULES_CACHE_TTL_S)
        clock: Time source for the cache
    """

    def __init__(
        self,
        client: SupabaseClient,
        *,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.cache: TTLCache[list] = TTLCache(
            ttl_seconds if ttl_seconds is not None else Config.RULES_CACHE_TTL_S,
            name="property_rules",
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _fetch_active(self, table: str) -> list:
        rows = self.client.select(table, '*').eq('active', True).execute().rows()
        row_type = SizePricingRow if table == SIZE_PRICING_TABLE else PropertyRuleRow
        logger.info(f"Loaded {len(rows)} active rows from {table}")
        return [row_type.from_row(r) for r in rows]

    def _load_table(self, table: str) -> list:
        # Each table is cached under its own key so one failing table
        # leaves the others usable
        return self.cache.get_or_load(lambda: self._fetch_active(table), key=table, default=[])

    def load_property_rules(self) -> PropertyRuleSet:
        """
        Return the three rule tables, refreshing stale ones in parallel.

        A table whose fetch fails comes back empty; the others are unaffected.
        """
        cached = [self.cache.get(table) for table in RULE_TABLES]
        if any(rows is None for rows in cached):
            with ThreadPoolExecutor(max_workers=len(RULE_TABLES)) as executor:
                cached = list(executor.map(self._load_table, RULE_TABLES))

        size_pricing, apartment_rules, villa_rules = cached
        return PropertyRuleSet(
            size_pricing=size_pricing,
            apartment_rules=apartment_rules,
            villa_rules=villa_rules,
        )

    def invalidate(self) -> None:
        self.cache.invalidate()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_size_pricing_for(
        self,
        *,
        property_type: str = 'apartment',
        bhk: Any = None,
    ) -> Optional[SizePricingRow]:
        """First size/pricing row for the property type and BHK, or None."""
        label = configuration_label(bhk)
        for row in self.load_property_rules().size_pricing:
            if same_text(row.property_type, property_type) and configuration_matches(row.configuration, label):
                return row
        return None

    def get_rules_for_room(
        self,
        *,
        property_type: str = 'apartment',
        bhk: Any = None,
        room_type: Optional[str] = None,
        room_subtype: Optional[str] = None,
    ) -> List[PropertyRuleRow]:
        """
        All rule rows for a room in a property configuration.

        Villas use the villa table; every other property type uses the
        apartment table.
        """
        rule_set = self.load_property_rules()
        rules = rule_set.villa_rules if same_text(property_type, 'villa') else rule_set.apartment_rules
        label = configuration_label(bhk)

        return [
            r for r in rules
            if configuration_matches(r.configuration, label)
            and same_text(r.room_type, room_type)
            and match_subtype(room_subtype, r.room_subtype) is not SubtypeMatch.MISMATCH
        ]

    def get_rule_for_item(
        self,
        *,
        property_type: str = 'apartment',
        bhk: Any = None,
        room_type: Optional[str] = None,
        room_subtype: Optional[str] = None,
        item_category: Optional[str] = None,
        item_subcategory: Optional[str] = None,
    ) -> Optional[PropertyRuleRow]:
        """First room rule for the item category (and subcategory), or None."""
        room_rules = self.get_rules_for_room(
            property_type=property_type,
            bhk=bhk,
            room_type=room_type,
            room_subtype=room_subtype,
        )
        for rule in room_rules:
            if not same_text(rule.item_category, item_category):
                continue
            if match_subtype(item_subcategory, rule.item_subcategory) is SubtypeMatch.MISMATCH:
                continue
            return rule
        return None

    def derive_item_constraints(
        self,
        *,
        property_type: str = 'apartment',
        bhk: Any = None,
        room_name: Optional[str] = None,
        item_type: Optional[str] = None,
        item_subtype: Optional[str] = None,
    ) -> Optional[ItemConstraints]:
        """
        Constraints for placing an item type in a named room.

        Returns None when the room is empty, the item type is not one of
        ITEM_CATEGORY_MAP, or no rule applies; callers then use their own
        defaults. Unknown item types never reach the store.
        """
        room = parse_room_name(room_name)
        if not room.type:
            return None

        item_category = ITEM_CATEGORY_MAP.get(to_text(item_type).lower())
        if not item_category:
            logger.debug(f"No rule category for item type '{item_type}'")
            return None

        rule = self.get_rule_for_item(
            property_type=property_type,
            bhk=bhk,
            room_type=room.type,
            room_subtype=room.subtype,
            item_category=item_category,
            item_subcategory=item_subtype,
        )
        if rule is None:
            return None
        return ItemConstraints.from_rule(rule)

    def determine_budget_tier(
        self,
        *,
        property_type: str = 'apartment',
        bhk: Any = None,
        total_budget: Any = None,
    ) -> str:
        """
        Classify a total budget as 'economy', 'premium' or 'luxury'.

        Thresholds are checked from luxury down; anything unknown is economy.
        """
        budget = to_number(total_budget)
        if not budget:
            return 'economy'

        row = self.get_size_pricing_for(property_type=property_type, bhk=bhk)
        if row is None:
            return 'economy'

        if row.budget_luxury_min_inr and budget >= row.budget_luxury_min_inr:
            return 'luxury'
        if row.budget_premium_min_inr and budget >= row.budget_premium_min_inr:
            return 'premium'
        return 'economy'
