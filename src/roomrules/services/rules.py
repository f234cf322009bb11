"""
Generic sizing rules from the ``rules`` table.

Each row describes a property type/configuration with carpet and built-up
area ranges and per-tier budget ranges, all stored as free-form text.
"""
from __future__ import annotations

import time
from typing import Any, Callable, List, Optional

from ..config import Config
from ..logger import get_logger
from ..models import BudgetRanges, RuleHint, SizingRule
from ..store.client import SupabaseClient
from ..utils.coerce import to_number, to_text
from .cache import TTLCache
from .property_rules import configuration_label
from .ranges import parse_range

logger = get_logger(__name__)

RULES_TABLE = 'rules'


def sizing_rule_from_row(row: dict) -> SizingRule:
    """Normalize a raw ``rules`` row; legacy short column names are accepted."""
    other_names = [s.strip() for s in to_text(row.get('other_variant_names')).split(',')]
    return SizingRule(
        id=row.get('id'),
        property_type=to_text(row.get('property_type') or row.get('propertyType')).lower(),
        configuration=to_text(row.get('configuration')).lower(),
        other_names=[s for s in other_names if s],
        carpet=parse_range(row.get('carpet_area_range_sqft') or row.get('carpet')),
        built_up=parse_range(row.get('built_up_area_range_sqft') or row.get('builtup')),
        budget=BudgetRanges(
            economy=parse_range(row.get('budget_range_economy_inr') or row.get('budget_economy')),
            premium=parse_range(row.get('budget_range_premium_inr') or row.get('budget_premium')),
            luxury=parse_range(row.get('budget_range_luxury_inr') or row.get('budget_luxury')),
        ),
    )


class SizingRulesService:
    """Loads and matches generic sizing rules."""

    def __init__(
        self,
        client: SupabaseClient,
        *,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.cache: TTLCache[List[SizingRule]] = TTLCache(
            ttl_seconds if ttl_seconds is not None else Config.RULES_CACHE_TTL_S,
            name="sizing_rules",
            clock=clock,
        )

    def _fetch_rules(self) -> List[SizingRule]:
        rows = self.client.select(RULES_TABLE, '*').eq('active', True).execute().rows()
        rules = [sizing_rule_from_row(r) for r in rows]
        logger.info(f"Sizing rules refreshed: {len(rules)} rows")
        return rules

    def load_rules(self) -> List[SizingRule]:
        return self.cache.get_or_load(self._fetch_rules, default=[])

    def invalidate(self) -> None:
        self.cache.invalidate()

    def derive_rule_for(
        self,
        *,
        property_type: Optional[str] = 'apartment',
        bhk: Any = None,
        sqft: Any = None,
    ) -> Optional[RuleHint]:
        """
        Best sizing rule for a property type, BHK and (optional) area.

        Candidates must contain the property type and "<bhk> bhk" as
        substrings. When sqft is given, the first candidate whose carpet or
        built-up range contains it wins; otherwise the first candidate.

        Returns:
            RuleHint or None when nothing matches
        """
        type_text = to_text(property_type).lower()
        label = configuration_label(bhk)

        candidates = [
            r for r in self.load_rules()
            if (not type_text or type_text in r.property_type)
            and (not label or label in r.configuration)
        ]
        if not candidates:
            return None

        area = to_number(sqft)
        best = None
        if area:
            best = next(
                (c for c in candidates if c.carpet.contains(area) or c.built_up.contains(area)),
                None,
            )

        return RuleHint.from_rule(best or candidates[0])
