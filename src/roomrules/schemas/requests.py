"""
Pydantic schemas for API request validation.
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class PropertyQuery(BaseModel):
    """Property type and configuration shared by the rule endpoints."""
    property_type: str = Field(default="apartment", min_length=1, description="apartment, villa, ...")
    bhk: Optional[Union[int, float, str]] = Field(default=None, description="Bedroom count, e.g. 2 or '2.5'")

    @field_validator('property_type')
    @classmethod
    def normalize_property_type(cls, v: str) -> str:
        return v.strip().lower()


class RoomClassifyRequest(BaseModel):
    room_name: str = Field(default="", description="Free-text room label")


class ExpandRequest(BaseModel):
    text: Optional[str] = Field(default=None, description="Free text to expand")
    keywords: List[str] = Field(default_factory=list, description="Keywords to expand")


class ItemConstraintsRequest(PropertyQuery):
    room_name: str = Field(..., min_length=1, description="Free-text room label")
    item_type: str = Field(..., min_length=1, description="Planner item type, e.g. sofa, tv_bench")
    item_subtype: Optional[str] = Field(default=None, description="Optional item subcategory")


class BudgetTierRequest(PropertyQuery):
    total_budget: Optional[float] = Field(default=None, ge=0, description="Total budget in INR")


class SizingRequest(PropertyQuery):
    sqft: Optional[float] = Field(default=None, gt=0, description="Carpet or built-up area")


class SuggestionsRequest(BaseModel):
    room: str = Field(..., min_length=1, description="Canonical room type")
    style_bias: List[str] = Field(default_factory=list, description="Style keywords")

    @field_validator('style_bias', mode='before')
    @classmethod
    def split_style_bias(cls, v):
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(',') if s.strip()]
        return v


class SearchRequest(BaseModel):
    tokens: List[str] = Field(..., min_length=1, description="Terms every item must contain")
    max_price: Optional[float] = Field(default=None, gt=0, description="Price ceiling in INR")
    package: Optional[str] = Field(default=None, description="Package filter, e.g. premium")
    limit: int = Field(default=20, ge=1, le=100)
