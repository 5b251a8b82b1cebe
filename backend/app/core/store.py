"""
Row-level access to Supabase tables.

Every call is independent: PostgREST offers no multi-statement transaction
over this client, so callers that need several writes to succeed together
have to compensate themselves.
"""
import asyncio
import functools
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.logging import get_logger

logger = get_logger(__name__)

# PostgREST refuses an unfiltered DELETE, so "delete everything" matches every
# id except a UUID no row can have.
NIL_UUID = "00000000-0000-0000-0000-000000000000"

Row = Dict[str, Any]


class StoreError(Exception):
    """A store call failed. ``message`` holds the raw store text, for logs only."""

    def __init__(self, operation: str, table: str, message: str):
        super().__init__(f"{operation} on {table} failed: {message}")
        self.operation = operation
        self.table = table
        self.message = message


class SupabaseStore:
    def __init__(self, client: Client):
        self.client = client

    async def _run_sync(self, func, *args, **kwargs):
        """Run a synchronous function in a thread pool"""
        loop = asyncio.get_running_loop()
        partial_func = functools.partial(func, *args, **kwargs)
        return await loop.run_in_executor(None, partial_func)

    async def _execute(self, operation: str, table: str, query) -> List[Row]:
        try:
            response = await self._run_sync(query.execute)
        except APIError as e:
            raise StoreError(operation, table, e.message or str(e)) from e
        except httpx.HTTPError as e:
            raise StoreError(operation, table, str(e)) from e
        return response.data or []

    async def insert(self, table: str, rows: List[Row]) -> List[Row]:
        query = self.client.table(table).insert(rows)
        return await self._execute("insert", table, query)

    async def select(
        self,
        table: str,
        columns: str = "*",
        match: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        query = self.client.table(table).select(columns)
        for column, value in (match or {}).items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by)
        if limit is not None:
            query = query.limit(limit)
        return await self._execute("select", table, query)

    async def update(self, table: str, patch: Row, match: Dict[str, Any]) -> List[Row]:
        query = self.client.table(table).update(patch)
        for column, value in match.items():
            query = query.eq(column, value)
        return await self._execute("update", table, query)

    async def delete(self, table: str, match: Dict[str, Any]) -> List[Row]:
        if not match:
            raise ValueError("delete requires a match; use delete_all to clear a table")
        query = self.client.table(table).delete()
        for column, value in match.items():
            query = query.eq(column, value)
        return await self._execute("delete", table, query)

    async def delete_all(self, table: str) -> None:
        query = self.client.table(table).delete().neq("id", NIL_UUID)
        await self._execute("delete", table, query)
