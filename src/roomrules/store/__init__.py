"""
Data-store access (read-only Supabase REST client).
"""
from .client import SupabaseClient, Query, StoreResult

__all__ = ["SupabaseClient", "Query", "StoreResult"]
