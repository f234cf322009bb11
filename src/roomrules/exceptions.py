"""
Exceptions raised by the data-store layer.

Resolvers catch these locally and degrade to empty results, so callers of
the services never see them.
"""
from typing import Optional


class StoreError(Exception):
    """Base class for data-store failures."""

    def __init__(self, message: str, table: Optional[str] = None) -> None:
        self.message = message
        self.table = table
        super().__init__(message)

    def __str__(self) -> str:
        if self.table:
            return f"[{self.table}] {self.message}"
        return self.message


class StoreUnavailable(StoreError):
    """The store call failed at the transport or HTTP level."""


class StoreNotConfigured(StoreError):
    """No store URL or API key was provided."""
