"""
Shared fixtures: an in-memory stand-in for SupabaseStore with failure injection
"""
import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from app.core.store import StoreError
from app.onboarding.schemas import ComponentAssignmentIn


class InMemoryStore:
    """
    Mimics the SupabaseStore call surface over plain dicts.

    ``fail_on`` maps ``(operation, table)`` to an error message; a matching
    call raises StoreError before touching any data. ``calls`` records every
    call in order. Every call yields to the event loop first, so concurrent
    callers interleave the way they would against a remote store.
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.fail_on: Dict[tuple, str] = {}
        self.calls: List[tuple] = []

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        message = self.fail_on.get((operation, table))
        if message is not None:
            raise StoreError(operation, table, message)

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.setdefault(table, [])

    @staticmethod
    def _matches(row: Dict[str, Any], match: Optional[Dict[str, Any]]) -> bool:
        return all(str(row.get(k)) == str(v) for k, v in (match or {}).items())

    async def insert(self, table, rows):
        await asyncio.sleep(0)
        self._check("insert", table)
        inserted = []
        for row in rows:
            stored = {
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                **row,
            }
            self.rows(table).append(stored)
            inserted.append(dict(stored))
        return inserted

    async def select(self, table, columns="*", match=None, order_by=None, limit=None):
        await asyncio.sleep(0)
        self._check("select", table)
        result = [dict(r) for r in self.rows(table) if self._matches(r, match)]
        if "user_profiles(*)" in columns:
            for row in result:
                row["user_profiles"] = [
                    dict(p) for p in self.rows("user_profiles") if p["user_id"] == row["id"]
                ]
        if order_by:
            result.sort(key=lambda r: r[order_by])
        if limit is not None:
            result = result[:limit]
        return result

    async def update(self, table, patch, match):
        await asyncio.sleep(0)
        self._check("update", table)
        updated = []
        for row in self.rows(table):
            if self._matches(row, match):
                row.update(patch)
                updated.append(dict(row))
        return updated

    async def delete(self, table, match):
        await asyncio.sleep(0)
        self._check("delete", table)
        kept = [r for r in self.rows(table) if not self._matches(r, match)]
        removed = [r for r in self.rows(table) if self._matches(r, match)]
        self.tables[table] = kept
        return removed

    async def delete_all(self, table):
        await asyncio.sleep(0)
        self._check("delete", table)
        self.tables[table] = []


@pytest.fixture
def store():
    return InMemoryStore()


def make_components(*pairs) -> List[ComponentAssignmentIn]:
    return [
        ComponentAssignmentIn(component_name=name, page_number=page)
        for name, page in pairs
    ]


@pytest.fixture
def valid_components():
    return make_components(("about_me", 2), ("address", 2), ("birthdate", 3))


def fast_hash(password: str) -> str:
    return f"hashed::{password}"
