"""
Pytest configuration and fixtures for roomrules tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest

from roomrules.exceptions import StoreUnavailable
from roomrules.store.client import StoreResult, SupabaseClient
from roomrules.utils.coerce import to_number


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeStore(SupabaseClient):
    """
    In-memory stand-in for the Supabase REST API.

    Replays eq filters, order and limit from the query's recorded
    operations and records every table read in ``calls``.
    """

    def __init__(self, tables=None):
        super().__init__("https://example.supabase.co", "test-key")
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.calls = []
        self.failing = set()

    def execute(self, query):
        self.calls.append(query.table)
        if query.table in self.failing:
            return StoreResult(error=StoreUnavailable("connection refused", query.table))

        rows = list(self.tables.get(query.table, []))
        for name, args, kwargs in query.operations:
            if name == "eq":
                column, value = args
                rows = [r for r in rows if r.get(column) == value]
            elif name == "order":
                column = args[0]
                rows.sort(
                    key=lambda r: (to_number(r.get(column)) is None, to_number(r.get(column)) or 0),
                    reverse=kwargs.get("desc", False),
                )
            elif name == "limit":
                rows = rows[:args[0]]
        return StoreResult(data=rows)

    def count(self, table):
        return self.calls.count(table)


@pytest.fixture
def clock():
    """A fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def make_store():
    """Factory for FakeStore instances preloaded with table rows."""
    def _make(tables=None):
        return FakeStore(tables)
    return _make


@pytest.fixture
def property_tables():
    """Sample size/pricing and room rule tables."""
    return {
        "size_and_pricing": [
            {"id": 1, "property_type": "Apartment", "configuration": "2 BHK",
             "budget_premium_min_inr": 800000, "budget_luxury_min_inr": 1500000, "active": True},
            {"id": 2, "property_type": "Villa", "configuration": "4 BHK",
             "budget_premium_min_inr": 3000000, "budget_luxury_min_inr": 6000000, "active": True},
            {"id": 3, "property_type": "apartment", "configuration": "3 BHK",
             "budget_premium_min_inr": "1200000", "budget_luxury_min_inr": "2500000", "active": True},
            {"id": 4, "property_type": "apartment", "configuration": "5 BHK",
             "budget_premium_min_inr": 1, "budget_luxury_min_inr": 2, "active": False},
        ],
        "rules_for_apartment": [
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "bedroom",
             "room_subtype": "master", "item_category": "Wardrobe", "item_subcategory": None,
             "min_quantity": 1, "max_quantity": 2, "recommended_quantity": 1,
             "size_preference": "large", "price_range_min_inr": 20000, "price_range_max_inr": 60000,
             "priority": "essential", "notes": "Sliding doors preferred", "active": True},
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "bedroom",
             "room_subtype": None, "item_category": "Bed", "item_subcategory": None,
             "min_quantity": 1, "max_quantity": 1, "recommended_quantity": 1,
             "size_preference": "queen", "price_range_min_inr": 15000, "price_range_max_inr": 45000,
             "priority": "essential", "notes": None, "active": True},
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "bedroom",
             "room_subtype": "guest", "item_category": "Wardrobe", "item_subcategory": "",
             "min_quantity": 1, "max_quantity": 1, "recommended_quantity": 1,
             "size_preference": "medium", "price_range_min_inr": 12000, "price_range_max_inr": 30000,
             "priority": "recommended", "notes": None, "active": True},
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "living",
             "room_subtype": None, "item_category": "Sofa", "item_subcategory": "3 seater",
             "min_quantity": 1, "max_quantity": 1, "recommended_quantity": 1,
             "size_preference": "large", "price_range_min_inr": 25000, "price_range_max_inr": 90000,
             "priority": "essential", "notes": None, "active": True},
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "living",
             "room_subtype": None, "item_category": "Sofa", "item_subcategory": None,
             "min_quantity": 0, "max_quantity": 2, "recommended_quantity": None,
             "size_preference": None, "price_range_min_inr": None, "price_range_max_inr": None,
             "priority": None, "notes": None, "active": True},
            {"property_type": "apartment", "configuration": "2 BHK", "room_type": "bedroom",
             "room_subtype": "kids", "item_category": "Bed", "item_subcategory": "bunk",
             "min_quantity": 1, "max_quantity": 1, "recommended_quantity": 1,
             "size_preference": "single", "price_range_min_inr": 10000, "price_range_max_inr": 20000,
             "priority": "essential", "notes": None, "active": False},
        ],
        "rules_for_villa": [
            {"property_type": "villa", "configuration": "4 BHK", "room_type": "bedroom",
             "room_subtype": "master", "item_category": "Wardrobe", "item_subcategory": None,
             "min_quantity": 1, "max_quantity": 3, "recommended_quantity": 2,
             "size_preference": "walk-in", "price_range_min_inr": 60000, "price_range_max_inr": 200000,
             "priority": "essential", "notes": None, "active": True},
        ],
    }


@pytest.fixture
def catalog_rows():
    """Sample interior_items rows (not in price order)."""
    return [
        {"id": 1, "category": "Sofa", "subcategory": "3 seater", "item_name": "Oslo Sofa",
         "item_description": "Scandinavian design in light fabric", "item_details": "",
         "keywords": "sofa, fabric", "price_inr": 30000, "packages": "Economy",
         "base_material": "fabric"},
        {"id": 2, "category": "Lamp", "subcategory": "Floor lamp", "item_name": "Nordic Lamp",
         "item_description": "Tall floor lamp", "item_details": None,
         "keywords": "scandinavian, minimal", "price_inr": 3000, "packages": "Economy"},
        {"id": 3, "category": "Rug", "subcategory": "Area rug", "item_name": "Scandinavian wool rug",
         "item_description": "Scandinavian pattern", "item_details": "",
         "keywords": "", "price_inr": 5000, "packages": "Premium"},
        {"id": 4, "category": "Bed", "subcategory": "King bed", "item_name": "Royal Bed",
         "item_description": "Ornate carved headboard", "item_details": "",
         "keywords": "bed", "price_inr": 40000, "packages": "Luxury"},
        {"id": 5, "category": "Cushion", "subcategory": "Throw cushion", "item_name": "Boho Cushion",
         "item_description": "Tasselled", "item_details": "",
         "keywords": "", "price_inr": 800, "packages": "Economy"},
        {"id": 6, "category": "Desk", "subcategory": "Writing desk", "item_name": "Oak Desk",
         "item_description": "Scandinavian oak", "item_details": "",
         "keywords": "desk", "price_inr": 12000, "packages": "Premium"},
        {"id": 7, "category": "Sofa", "subcategory": " ", "item_name": "Chesterfield couch",
         "item_description": "Tufted three seater", "item_details": "",
         "keywords": "", "price_inr": 45000, "packages": "Premium",
         "base_material": "leather"},
    ]
