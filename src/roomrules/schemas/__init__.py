"""
Pydantic schemas for API validation and data contracts.
"""

from .requests import (
    PropertyQuery,
    RoomClassifyRequest,
    ExpandRequest,
    ItemConstraintsRequest,
    BudgetTierRequest,
    SizingRequest,
    SuggestionsRequest,
    SearchRequest,
)

__all__ = [
    'PropertyQuery',
    'RoomClassifyRequest',
    'ExpandRequest',
    'ItemConstraintsRequest',
    'BudgetTierRequest',
    'SizingRequest',
    'SuggestionsRequest',
    'SearchRequest',
]
