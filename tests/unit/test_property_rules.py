"""
Unit tests for property rule resolution and budget tiers.
"""
import pytest

from roomrules.models import ItemConstraints, PropertyRuleSet, SubtypeMatch
from roomrules.services.property_rules import (
    PropertyRulesService,
    configuration_label,
    configuration_matches,
    match_subtype,
)

RULE_TABLES = ("size_and_pricing", "rules_for_apartment", "rules_for_villa")


@pytest.fixture
def store(make_store, property_tables):
    return make_store(property_tables)


@pytest.fixture
def service(store, clock):
    return PropertyRulesService(store, ttl_seconds=600, clock=clock)


class TestMatchSubtype:

    @pytest.mark.parametrize("query,row,expected", [
        ("master", None, SubtypeMatch.WILDCARD),
        ("master", "", SubtypeMatch.WILDCARD),
        (None, "master", SubtypeMatch.WILDCARD),
        (None, None, SubtypeMatch.WILDCARD),
        ("master", "Master", SubtypeMatch.EXACT),
        ("master", "guest", SubtypeMatch.MISMATCH),
    ])
    def test_three_way_result(self, query, row, expected):
        assert match_subtype(query, row) is expected


class TestConfigurationMatching:

    @pytest.mark.parametrize("bhk,label", [
        (2, "2 bhk"), ("2", "2 bhk"), (3.0, "3 bhk"), (2.5, "2.5 bhk"),
        (None, None), ("", None), (0, None), (0.0, None),
    ])
    def test_configuration_label(self, bhk, label):
        assert configuration_label(bhk) == label

    def test_substring_match(self):
        assert configuration_matches("2 BHK Premium", "2 bhk")
        assert not configuration_matches("3 BHK", "2 bhk")

    def test_no_label_matches_anything(self):
        assert configuration_matches("4 BHK", None)


class TestLoading:

    def test_loads_three_active_tables(self, service, store):
        rules = service.load_property_rules()

        assert len(rules.size_pricing) == 3
        assert len(rules.apartment_rules) == 5
        assert len(rules.villa_rules) == 1
        assert sorted(store.calls) == sorted(RULE_TABLES)

    def test_cached_within_ttl(self, service, store, clock):
        service.load_property_rules()
        clock.advance(599)
        service.load_property_rules()

        for table in RULE_TABLES:
            assert store.count(table) == 1

    def test_refetches_after_ttl(self, service, store, clock):
        service.load_property_rules()
        clock.advance(600)
        service.load_property_rules()

        for table in RULE_TABLES:
            assert store.count(table) == 2

    def test_failed_table_only_empties_that_table(self, service, store):
        store.failing.add("rules_for_villa")

        rules = service.load_property_rules()

        assert rules.villa_rules == []
        assert len(rules.apartment_rules) == 5
        assert len(rules.size_pricing) == 3

    def test_apartment_lookups_survive_villa_outage(self, service, store):
        store.failing.add("rules_for_villa")

        assert service.determine_budget_tier(bhk=2, total_budget=900000) == "premium"
        assert len(service.get_rules_for_room(bhk=2, room_type="bedroom")) == 3
        assert service.get_rules_for_room(property_type="villa", bhk=4, room_type="bedroom") == []

    def test_all_tables_down(self, service, store):
        store.failing.update(RULE_TABLES)
        assert service.load_property_rules() == PropertyRuleSet()

    def test_failed_table_is_retried(self, service, store):
        store.failing.add("rules_for_villa")
        service.load_property_rules()
        store.failing.clear()

        assert len(service.load_property_rules().villa_rules) == 1
        assert store.count("rules_for_villa") == 2
        assert store.count("rules_for_apartment") == 1

    def test_failed_refresh_keeps_warm_entry(self, service, store, clock):
        service.load_property_rules()
        clock.advance(601)
        store.failing.add("size_and_pricing")

        assert service.determine_budget_tier(bhk=2, total_budget=900000) == "economy"
        assert len(service.get_rules_for_room(bhk=2, room_type="bedroom")) == 3
        assert len(service.cache) == 3

        store.failing.clear()
        assert service.determine_budget_tier(bhk=2, total_budget=900000) == "premium"

    def test_invalidate_forces_refetch(self, service, store):
        service.load_property_rules()
        service.invalidate()
        service.load_property_rules()

        assert store.count("rules_for_apartment") == 2


class TestSizePricing:

    def test_case_insensitive_property_type(self, service):
        row = service.get_size_pricing_for(property_type="apartment", bhk=2)
        assert row.id == 1
        assert row.budget_luxury_min_inr == 1500000

    def test_string_thresholds_are_numeric(self, service):
        row = service.get_size_pricing_for(property_type="Apartment", bhk="3")
        assert row.id == 3
        assert row.budget_premium_min_inr == 1200000

    def test_without_bhk_returns_first_of_type(self, service):
        assert service.get_size_pricing_for(property_type="villa").id == 2

    def test_zero_bhk_does_not_filter_configuration(self, service):
        assert service.get_size_pricing_for(property_type="apartment", bhk=0).id == 1

    def test_inactive_rows_are_ignored(self, service):
        assert service.get_size_pricing_for(property_type="apartment", bhk=5) is None

    def test_unknown_type(self, service):
        assert service.get_size_pricing_for(property_type="penthouse", bhk=2) is None


class TestRulesForRoom:

    def test_subtype_query_keeps_wildcard_rows(self, service):
        rows = service.get_rules_for_room(bhk=2, room_type="bedroom", room_subtype="master")

        categories = [(r.item_category, r.room_subtype) for r in rows]
        assert categories == [("Wardrobe", "master"), ("Bed", None)]

    def test_no_subtype_returns_all_room_rows(self, service):
        rows = service.get_rules_for_room(bhk=2, room_type="bedroom")
        assert len(rows) == 3

    def test_villa_uses_villa_table(self, service):
        rows = service.get_rules_for_room(property_type="Villa", bhk=4, room_type="bedroom", room_subtype="master")
        assert [r.size_preference for r in rows] == ["walk-in"]

    def test_other_types_use_apartment_table(self, service):
        rows = service.get_rules_for_room(property_type="penthouse", bhk=2, room_type="living")
        assert len(rows) == 2

    def test_configuration_mismatch(self, service):
        assert service.get_rules_for_room(bhk=3, room_type="bedroom") == []

    def test_room_type_is_exact(self, service):
        assert service.get_rules_for_room(bhk=2, room_type="bed") == []


class TestRuleForItem:

    def test_picks_room_subtype_row(self, service):
        master = service.get_rule_for_item(bhk=2, room_type="bedroom", room_subtype="master", item_category="Wardrobe")
        guest = service.get_rule_for_item(bhk=2, room_type="bedroom", room_subtype="guest", item_category="wardrobe")

        assert master.size_preference == "large"
        assert guest.size_preference == "medium"

    def test_subcategory_exact_match(self, service):
        rule = service.get_rule_for_item(bhk=2, room_type="living", item_category="Sofa", item_subcategory="3 seater")
        assert rule.item_subcategory == "3 seater"

    def test_subcategory_falls_back_to_wildcard_row(self, service):
        rule = service.get_rule_for_item(bhk=2, room_type="living", item_category="Sofa", item_subcategory="2 seater")
        assert rule.item_subcategory is None
        assert rule.max_quantity == 2

    def test_no_subcategory_takes_first_row(self, service):
        rule = service.get_rule_for_item(bhk=2, room_type="living", item_category="Sofa")
        assert rule.item_subcategory == "3 seater"

    def test_unknown_category(self, service):
        assert service.get_rule_for_item(bhk=2, room_type="living", item_category="Piano") is None


class TestDeriveItemConstraints:

    def test_master_bedroom_wardrobe(self, service):
        constraints = service.derive_item_constraints(
            bhk=2, room_name="Master Bedroom", item_type="wardrobe"
        )

        assert constraints == ItemConstraints(
            min_quantity=1,
            max_quantity=2,
            recommended_quantity=1,
            size_preference="large",
            price_min=20000,
            price_max=60000,
            priority="essential",
            notes="Sliding doors preferred",
        )

    def test_generic_rule_applies_to_any_subtype(self, service):
        constraints = service.derive_item_constraints(bhk=2, room_name="Guest Bedroom", item_type="bed")
        assert constraints.size_preference == "queen"

    def test_missing_values_use_defaults(self, service):
        constraints = service.derive_item_constraints(
            bhk=2, room_name="living room", item_type="sofa", item_subtype="2 seater"
        )

        assert constraints.min_quantity is None
        assert constraints.priority == "optional"
        assert constraints.price_min is None

    def test_unmapped_item_type_skips_store(self, service, store):
        assert service.derive_item_constraints(bhk=2, room_name="living", item_type="unicorn") is None
        assert store.calls == []

    def test_empty_room_name(self, service, store):
        assert service.derive_item_constraints(bhk=2, room_name="", item_type="sofa") is None
        assert store.calls == []

    def test_no_matching_rule(self, service):
        assert service.derive_item_constraints(bhk=2, room_name="kitchen", item_type="sofa") is None

    def test_store_down_returns_none(self, service, store):
        store.failing.update(RULE_TABLES)
        assert service.derive_item_constraints(bhk=2, room_name="Master Bedroom", item_type="wardrobe") is None

    def test_to_dict(self, service):
        data = service.derive_item_constraints(bhk=2, room_name="Master Bedroom", item_type="WARDROBE").to_dict()
        assert data["price_max"] == 60000
        assert data["priority"] == "essential"


class TestBudgetTier:

    @pytest.mark.parametrize("budget,tier", [
        (500000, "economy"),
        (799999, "economy"),
        (800000, "premium"),
        (1499999, "premium"),
        (1500000, "luxury"),
        (10000000, "luxury"),
        ("900000", "premium"),
    ])
    def test_thresholds(self, service, budget, tier):
        assert service.determine_budget_tier(bhk=2, total_budget=budget) == tier

    @pytest.mark.parametrize("budget", [None, 0, "", "lots"])
    def test_missing_budget_is_economy(self, service, budget):
        assert service.determine_budget_tier(bhk=2, total_budget=budget) == "economy"

    def test_unknown_configuration_is_economy(self, service):
        assert service.determine_budget_tier(bhk=9, total_budget=99999999) == "economy"

    def test_villa_thresholds(self, service):
        assert service.determine_budget_tier(property_type="villa", bhk=4, total_budget=4000000) == "premium"

    def test_store_down_is_economy(self, service, store):
        store.failing.update(RULE_TABLES)
        assert service.determine_budget_tier(bhk=2, total_budget=5000000) == "economy"

    def test_monotonic_in_budget(self, service):
        rank = {"economy": 0, "premium": 1, "luxury": 2}
        budgets = range(0, 3000001, 50000)
        tiers = [rank[service.determine_budget_tier(bhk=2, total_budget=b)] for b in budgets]
        assert tiers == sorted(tiers)
