"""
Data models for roomrules.

Records are built from raw store rows through ``from_row`` constructors that
coerce missing or malformed columns instead of rejecting the row.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any

from .utils.coerce import to_number, to_text, to_optional_text


class SubtypeMatch(str, Enum):
    """Outcome of comparing a queried subtype against a rule row's subtype."""

    EXACT = "exact"
    WILDCARD = "wildcard"
    MISMATCH = "mismatch"


@dataclass(slots=True)
class NumericRange:
    """
    Closed numeric interval; both bounds None means unconstrained.

    Attributes:
        min: Lower bound
        max: Upper bound
    """

    min: Optional[float] = None
    max: Optional[float] = None

    def is_open(self) -> bool:
        """True when neither bound is known."""
        return self.min is None and self.max is None

    def contains(self, value: float) -> bool:
        """Check membership; needs both bounds."""
        if self.min is None or self.max is None:
            return False
        return self.min <= value <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(slots=True)
class RoomClassification:
    """Canonical room type and optional subtype for a free-text room label."""

    type: Optional[str] = None
    subtype: Optional[str] = None

    def to_dict(self) -> dict:
        return {"type": self.type, "subtype": self.subtype}


@dataclass(slots=True)
class BudgetRanges:
    economy: NumericRange = field(default_factory=NumericRange)
    premium: NumericRange = field(default_factory=NumericRange)
    luxury: NumericRange = field(default_factory=NumericRange)

    def to_dict(self) -> dict:
        return {
            "economy": self.economy.to_dict(),
            "premium": self.premium.to_dict(),
            "luxury": self.luxury.to_dict(),
        }


@dataclass(slots=True)
class SizingRule:
    """
    One row of the ``rules`` table, normalized.

    Attributes:
        id: Row identifier
        property_type: Lowercased property type (apartment, villa, ...)
        configuration: Lowercased configuration label, e.g. "2 bhk"
        other_names: Alternative names for the configuration
        carpet: Carpet area range in square feet
        built_up: Built-up area range in square feet
        budget: Budget ranges per tier in INR
    """

    id: Any
    property_type: str
    configuration: str
    other_names: List[str] = field(default_factory=list)
    carpet: NumericRange = field(default_factory=NumericRange)
    built_up: NumericRange = field(default_factory=NumericRange)
    budget: BudgetRanges = field(default_factory=BudgetRanges)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_type": self.property_type,
            "configuration": self.configuration,
            "other_names": list(self.other_names),
            "carpet": self.carpet.to_dict(),
            "built_up": self.built_up.to_dict(),
            "budget": self.budget.to_dict(),
        }


@dataclass(slots=True)
class SizePricingRow:
    """A ``size_and_pricing`` row with its tier thresholds."""

    id: Any
    property_type: str
    configuration: str
    budget_premium_min_inr: Optional[float] = None
    budget_luxury_min_inr: Optional[float] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> SizePricingRow:
        return cls(
            id=row.get("id"),
            property_type=to_text(row.get("property_type")),
            configuration=to_text(row.get("configuration")),
            budget_premium_min_inr=to_number(row.get("budget_premium_min_inr")),
            budget_luxury_min_inr=to_number(row.get("budget_luxury_min_inr")),
            raw=dict(row),
        )

    def to_dict(self) -> dict:
        return dict(self.raw)


@dataclass(slots=True)
class PropertyRuleRow:
    """
    Quantity/size/price constraints for one item category in one room of a
    property configuration. Missing subtype columns act as wildcards.
    """

    property_type: str = ""
    configuration: str = ""
    room_type: str = ""
    room_subtype: Optional[str] = None
    item_category: str = ""
    item_subcategory: Optional[str] = None
    min_quantity: Optional[float] = None
    max_quantity: Optional[float] = None
    recommended_quantity: Optional[float] = None
    size_preference: Optional[str] = None
    price_range_min_inr: Optional[float] = None
    price_range_max_inr: Optional[float] = None
    priority: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> PropertyRuleRow:
        return cls(
            property_type=to_text(row.get("property_type")),
            configuration=to_text(row.get("configuration")),
            room_type=to_text(row.get("room_type")),
            room_subtype=to_optional_text(row.get("room_subtype")),
            item_category=to_text(row.get("item_category")),
            item_subcategory=to_optional_text(row.get("item_subcategory")),
            min_quantity=to_number(row.get("min_quantity")),
            max_quantity=to_number(row.get("max_quantity")),
            recommended_quantity=to_number(row.get("recommended_quantity")),
            size_preference=to_optional_text(row.get("size_preference")),
            price_range_min_inr=to_number(row.get("price_range_min_inr")),
            price_range_max_inr=to_number(row.get("price_range_max_inr")),
            priority=to_optional_text(row.get("priority")),
            notes=to_optional_text(row.get("notes")),
        )


@dataclass(slots=True)
class ItemConstraints:
    """Constraints a caller should apply when picking items for a room."""

    min_quantity: Optional[float] = None
    max_quantity: Optional[float] = None
    recommended_quantity: Optional[float] = None
    size_preference: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    priority: str = "optional"
    notes: Optional[str] = None

    @classmethod
    def from_rule(cls, rule: PropertyRuleRow) -> ItemConstraints:
        # Zero quantities and prices carry no constraint
        return cls(
            min_quantity=rule.min_quantity or None,
            max_quantity=rule.max_quantity or None,
            recommended_quantity=rule.recommended_quantity or None,
            size_preference=rule.size_preference,
            price_min=rule.price_range_min_inr or None,
            price_max=rule.price_range_max_inr or None,
            priority=rule.priority or "optional",
            notes=rule.notes,
        )

    def to_dict(self) -> dict:
        return {
            "min_quantity": self.min_quantity,
            "max_quantity": self.max_quantity,
            "recommended_quantity": self.recommended_quantity,
            "size_preference": self.size_preference,
            "price_min": self.price_min,
            "price_max": self.price_max,
            "priority": self.priority,
            "notes": self.notes,
        }


@dataclass(slots=True)
class RuleHint:
    """Compact sizing/budget hint for a property type and configuration."""

    property_type: str
    configuration: str
    carpet_range: NumericRange
    built_up_range: NumericRange
    budget_economy: NumericRange
    budget_premium: NumericRange
    budget_luxury: NumericRange

    @classmethod
    def from_rule(cls, rule: SizingRule) -> RuleHint:
        return cls(
            property_type=rule.property_type,
            configuration=rule.configuration,
            carpet_range=rule.carpet,
            built_up_range=rule.built_up,
            budget_economy=rule.budget.economy,
            budget_premium=rule.budget.premium,
            budget_luxury=rule.budget.luxury,
        )

    def to_dict(self) -> dict:
        return {
            "property_type": self.property_type,
            "configuration": self.configuration,
            "carpet_range": self.carpet_range.to_dict(),
            "built_up_range": self.built_up_range.to_dict(),
            "budget_economy": self.budget_economy.to_dict(),
            "budget_premium": self.budget_premium.to_dict(),
            "budget_luxury": self.budget_luxury.to_dict(),
        }


@dataclass(slots=True)
class PropertyRuleSet:
    """The three property rule tables, loaded together."""

    size_pricing: List[SizePricingRow] = field(default_factory=list)
    apartment_rules: List[PropertyRuleRow] = field(default_factory=list)
    villa_rules: List[PropertyRuleRow] = field(default_factory=list)


@dataclass(slots=True)
class CatalogItem:
    """
    A furnishing item from ``interior_items``. Read-only.

    Attributes:
        id: Row identifier
        item_name: Display name
        description: Short description
        details: Long-form details
        category: Catalog category, e.g. "Sofa"
        subcategory: Catalog subcategory
        price_inr: Price in INR
        suggestive_areas: Rooms the item suits
        preferred_theme: Style theme
        keywords: Comma-separated search keywords
    """

    id: Any = None
    item_name: str = ""
    description: str = ""
    details: str = ""
    category: str = ""
    subcategory: str = ""
    price_inr: Optional[float] = None
    suggestive_areas: str = ""
    preferred_theme: str = ""
    keywords: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> CatalogItem:
        return cls(
            id=row.get("id"),
            item_name=to_text(row.get("item_name")),
            description=to_text(row.get("item_description")),
            details=to_text(row.get("item_details")),
            category=to_text(row.get("category")),
            subcategory=to_text(row.get("subcategory")),
            price_inr=to_number(row.get("price_inr")),
            suggestive_areas=to_text(row.get("suggestive_areas")),
            preferred_theme=to_text(row.get("preferred_theme")),
            keywords=to_text(row.get("keywords")),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_name": self.item_name,
            "description": self.description,
            "details": self.details,
            "category": self.category,
            "subcategory": self.subcategory,
            "price_inr": self.price_inr,
            "suggestive_areas": self.suggestive_areas,
            "preferred_theme": self.preferred_theme,
            "keywords": self.keywords,
        }


@dataclass(frozen=True)
class ExpandedQuery:
    """
    Free text paired with the bag of synonym terms it should also match.

    Attributes:
        text: Normalized, lowercased input text
        terms: Synonyms of every recognized phrase in the text
    """

    text: str
    terms: frozenset = frozenset()

    def all_terms(self) -> frozenset:
        """Terms plus the whole normalized text."""
        if not self.text:
            return self.terms
        return self.terms | {self.text}

    def matches(self, haystack: str) -> bool:
        """True if the text or any expanded term occurs in haystack."""
        haystack = haystack.lower()
        return any(term and term in haystack for term in self.all_terms())

    def to_dict(self) -> dict:
        return {"text": self.text, "terms": sorted(self.terms)}
