"""
Catalog lookups: category listings, room-scoped category suggestions ranked
by style keywords, and exact-match item search with synonym expansion.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..config import Config
from ..exceptions import StoreError
from ..logger import get_logger
from ..models import CatalogItem
from ..store.client import SupabaseClient
from ..utils.coerce import to_number, to_text
from ..utils.text_cleaning import dedupe_preserve_order, searchable_text
from .cache import TTLCache
from .synonyms import get_synonyms

logger = get_logger(__name__)

ITEMS_TABLE = 'interior_items'

SUGGESTION_COLUMNS = 'category,subcategory,item_name,item_description,item_details,keywords'
SEARCH_COLUMNS = (
    'id,item_name,item_description,item_details,keywords,variation_name,base_material,'
    'finish_material,price_inr,packages,price_tier,preferred_theme,suggestive_areas,'
    'category,subcategory'
)

# Categories always suggested first for a room, in this order
ROOM_DEFAULTS: Dict[str, List[str]] = {
    'living': ['Sofa', 'Tv-bench', 'Table', 'Lamp', 'Chair'],
    'bedroom': ['Bed', 'Wardrobe', 'Table', 'Mirror', 'Lamp'],
    'kitchen': ['Cabinet', 'Shelf', 'Table'],
    'bathroom': ['Wash-stand', 'Mirror', 'Shelf'],
    'dining': ['Table', 'Chair', 'Cabinet'],
    'balcony': ['Chair', 'Table'],
    'study': ['Desk', 'Chair', 'Shelf'],
    'foyer': ['Cabinet', 'Mirror'],
}


def normalize_style_bias(style_bias: Optional[Iterable[Any]]) -> List[str]:
    return [s for s in (to_text(b).lower() for b in (style_bias or [])) if s]


def style_score(row: dict, bias: Sequence[str]) -> int:
    """Number of bias keywords found anywhere in the row's text fields."""
    text = searchable_text(
        row.get('item_name'), row.get('item_description'),
        row.get('item_details'), row.get('keywords'),
    )
    return sum(1 for keyword in bias if keyword and keyword in text)


def rank_suggestions(
    rows: Iterable[dict],
    bias: Sequence[str],
    defaults: Sequence[str] = (),
    limit: int = 12,
) -> List[str]:
    """
    Merge room defaults with categories and subcategories ranked by score.

    Scores are summed per category and per subcategory. Defaults come first,
    then categories, then subcategories, each by descending score with ties
    in first-seen order. Duplicates are dropped and the list is cut to limit.
    """
    category_scores: Dict[str, int] = {}
    subcategory_scores: Dict[str, int] = {}

    for row in rows:
        score = style_score(row, bias)
        category = to_text(row.get('category'))
        subcategory = to_text(row.get('subcategory'))
        if category:
            category_scores[category] = category_scores.get(category, 0) + score
        if subcategory:
            subcategory_scores[subcategory] = subcategory_scores.get(subcategory, 0) + score

    ranked_categories = sorted(category_scores, key=lambda k: -category_scores[k])
    ranked_subcategories = sorted(subcategory_scores, key=lambda k: -subcategory_scores[k])

    merged = dedupe_preserve_order([*defaults, *ranked_categories, *ranked_subcategories])
    return merged[:limit]


class CatalogService:
    """
    Read-side catalog helpers with per-dataset caches.

    Args:
        client: Store client
        ttl_seconds: Cache lifetime (defaults to Config.CATALOG_CACHE_TTL_S)
        clock: Time source for the caches
    """

    def __init__(
        self,
        client: SupabaseClient,
        *,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        ttl = ttl_seconds if ttl_seconds is not None else Config.CATALOG_CACHE_TTL_S
        self.categories_cache: TTLCache[List[str]] = TTLCache(ttl, name="categories", clock=clock)
        self.subcategories_cache: TTLCache[List[str]] = TTLCache(ttl, name="subcategories", clock=clock)
        self.suggestions_cache: TTLCache[List[str]] = TTLCache(ttl, name="suggestions", clock=clock)

    def invalidate(self) -> None:
        self.categories_cache.invalidate()
        self.subcategories_cache.invalidate()
        self.suggestions_cache.invalidate()

    def _fetch_distinct(self, column: str) -> List[str]:
        rows = self.client.select(ITEMS_TABLE, column).execute().rows()
        values = (to_text(r.get(column)) for r in rows)
        return dedupe_preserve_order(v for v in values if v)

    def get_distinct_categories(self) -> List[str]:
        return self.categories_cache.get_or_load(
            lambda: self._fetch_distinct('category'), default=[]
        )

    def get_distinct_subcategories(self) -> List[str]:
        return self.subcategories_cache.get_or_load(
            lambda: self._fetch_distinct('subcategory'), default=[]
        )

    def get_room_scoped_suggestions(
        self,
        room: Optional[str],
        *,
        style_bias: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """
        Ranked category/subcategory suggestions for a room.

        A price-ascending sample of the catalog is scored against the style
        bias keywords; the room's default categories always lead.

        Args:
            room: Canonical room type, e.g. "living"
            style_bias: Style keywords such as ["scandinavian", "oak"]

        Returns:
            At most Config.SUGGESTION_LIMIT names
        """
        room_key = to_text(room).lower()
        bias = normalize_style_bias(style_bias)
        defaults = ROOM_DEFAULTS.get(room_key, [])
        limit = Config.SUGGESTION_LIMIT

        def load() -> List[str]:
            rows = (
                self.client.select(ITEMS_TABLE, SUGGESTION_COLUMNS)
                .order('price_inr', ascending=True)
                .limit(Config.SUGGESTION_SAMPLE_SIZE)
                .execute()
                .rows()
            )
            return rank_suggestions(rows, bias, defaults, limit)

        cache_key = f"{room_key}|{','.join(sorted(bias))}"
        return self.suggestions_cache.get_or_load(load, key=cache_key, default=defaults[:limit])

    def search_items(
        self,
        tokens: Iterable[Union[str, Sequence[str]]],
        *,
        max_price: Any = None,
        package: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogItem]:
        """
        Exact-match item search over a bounded catalog sample.

        Every token must occur in the item's text; a token also matches
        through any of its synonyms. Nested token lists are flattened.

        Args:
            tokens: Required terms
            max_price: Optional price ceiling in INR
            package: Optional package/tier filter (e.g. "premium")
            limit: Maximum items returned

        Returns:
            Matching items, possibly empty
        """
        flat: List[str] = []
        for token in tokens or []:
            if isinstance(token, (list, tuple)):
                flat.extend(to_text(t).lower() for t in token)
            else:
                flat.append(to_text(token).lower())
        groups = [get_synonyms(t) for t in flat if t]

        ceiling = to_number(max_price)
        wanted_package = to_text(package).lower()
        limit = limit or Config.DEFAULT_SEARCH_LIMIT

        try:
            rows = (
                self.client.select(ITEMS_TABLE, SEARCH_COLUMNS)
                .limit(Config.SEARCH_SAMPLE_SIZE)
                .execute()
                .rows()
            )
        except StoreError as e:
            logger.warning(f"Catalog search failed: {e}")
            return []

        matches: List[CatalogItem] = []
        for row in rows:
            text = searchable_text(
                row.get('item_name'), row.get('item_description'), row.get('item_details'),
                row.get('keywords'), row.get('variation_name'),
                row.get('base_material'), row.get('finish_material'),
            )
            if not all(any(s in text for s in group) for group in groups):
                continue
            if ceiling:
                price = to_number(row.get('price_inr'))
                if price is None or price > ceiling:
                    continue
            if wanted_package:
                packages = searchable_text(row.get('packages'), row.get('price_tier'))
                if wanted_package not in packages:
                    continue
            matches.append(CatalogItem.from_row(row))
            if len(matches) >= limit:
                break

        logger.debug(f"Catalog search for {flat} matched {len(matches)} items")
        return matches
