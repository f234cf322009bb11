"""
Read-only Supabase store access.

Services build queries against a small deferred builder that is replayed
onto the supabase-py query builder when executed:

    result = client.select("rules", "*").eq("active", True).execute()
    rows = result.rows()

``execute()`` never raises; API and transport failures are reported in
``StoreResult.error`` and surface as StoreError only when the caller asks
for the rows.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import httpx
from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client

from ..config import Config
from ..exceptions import StoreError, StoreNotConfigured, StoreUnavailable
from ..logger import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class StoreResult:
    """Outcome of a query: ``data`` on success, ``error`` otherwise."""

    data: Any = None
    error: Optional[StoreError] = None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def rows(self) -> List[dict]:
        """
        Return the result as a list of rows.

        Raises:
            StoreError: If the query failed
        """
        self.raise_for_error()
        if isinstance(self.data, list):
            return self.data
        if isinstance(self.data, dict):
            return [self.data]
        return []


Operation = Tuple[str, Tuple[Any, ...], Dict[str, Any]]


class Query:
    """Chainable filters for a single table read, applied on execute()."""

    def __init__(self, store: SupabaseClient, table: str, columns: str = "*") -> None:
        self._store = store
        self.table = table
        self.columns = columns
        self._operations: List[Operation] = []
        self._single = False

    def _add(self, name: str, *args: Any, **kwargs: Any) -> Query:
        self._operations.append((name, args, kwargs))
        return self

    def eq(self, column: str, value: Any) -> Query:
        return self._add("eq", column, value)

    def ilike(self, column: str, pattern: str) -> Query:
        return self._add("ilike", column, pattern)

    def or_(self, expression: str) -> Query:
        """PostgREST disjunction, e.g. ``"category.eq.Sofa,category.eq.Chair"``."""
        return self._add("or_", expression)

    def order(self, column: str, *, ascending: bool = True) -> Query:
        return self._add("order", column, desc=not ascending)

    def limit(self, count: int) -> Query:
        return self._add("limit", max(1, int(count)))

    def maybe_single(self) -> Query:
        """Return one row (or None) instead of a list; more than one row is an error."""
        self._single = True
        return self

    @property
    def operations(self) -> List[Operation]:
        return list(self._operations)

    def build(self, client: Client) -> Any:
        """Replay the recorded filters onto a supabase-py request builder."""
        builder = client.table(self.table).select(self.columns)
        for name, args, kwargs in self._operations:
            builder = getattr(builder, name)(*args, **kwargs)
        return builder

    def execute(self) -> StoreResult:
        result = self._store.execute(self)
        if not self._single or result.error is not None:
            return result

        data = result.rows()
        if len(data) > 1:
            return StoreResult(
                error=StoreUnavailable(f"expected at most one row, got {len(data)}", self.table)
            )
        return StoreResult(data=data[0] if data else None)


class SupabaseClient:
    """
    Store facade over a supabase-py client.

    The underlying client is created on first use, so an unconfigured
    instance never touches the network.

    Args:
        url: Project URL, e.g. ``https://xyz.supabase.co``
        api_key: Anon (or service) key
        timeout_s: PostgREST request timeout in seconds
        client: Optional pre-built supabase client
    """

    def __init__(
        self,
        url: Optional[str],
        api_key: Optional[str],
        *,
        timeout_s: int = 15,
        client: Optional[Client] = None,
    ) -> None:
        self.url = (url or "").rstrip("/")
        self.api_key = api_key
        self.timeout_s = timeout_s
        self._client = client

    @classmethod
    def from_config(cls) -> SupabaseClient:
        """Create a client from environment configuration."""
        if not Config.SUPABASE_URL or not Config.SUPABASE_ANON_KEY:
            logger.warning("Supabase URL or key missing; store queries will fail")
        return cls(
            Config.SUPABASE_URL,
            Config.SUPABASE_ANON_KEY,
            timeout_s=Config.SUPABASE_TIMEOUT_S,
        )

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.url and self.api_key)

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(
                self.url,
                self.api_key,
                options=ClientOptions(postgrest_client_timeout=self.timeout_s),
            )
        return self._client

    def select(self, table: str, columns: str = "*") -> Query:
        return Query(self, table, columns)

    def execute(self, query: Query) -> StoreResult:
        """Run a query and wrap the outcome."""
        if not self.is_configured:
            return StoreResult(error=StoreNotConfigured("Supabase URL or API key not set", query.table))

        try:
            response = query.build(self.client).execute()
        except APIError as e:
            logger.warning(f"Store query on '{query.table}' rejected: {e.message}")
            return StoreResult(error=StoreUnavailable(f"{e.code}: {e.message}", query.table))
        except httpx.HTTPError as e:
            logger.warning(f"Store request to '{query.table}' failed: {e}")
            return StoreResult(error=StoreUnavailable(str(e), query.table))

        data = response.data
        logger.debug(f"Fetched {len(data) if isinstance(data, list) else 1} row(s) from '{query.table}'")
        return StoreResult(data=data)
