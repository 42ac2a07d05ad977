"""Pytest configuration and fixtures for erpdash tests.

Every external collaborator has an in-memory stand-in here: a spy table
store that records calls and can be told to fail, a dict-backed key-value
store, and a notifier that remembers what it was asked to show.
"""

import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from erpdash.auth.jwt import create_access_token
from erpdash.auth.session import UserSession
from erpdash.dependencies import (
    get_kv_store,
    get_ledger_registry,
    get_notifier,
    get_table_store,
)
from erpdash.main import app
from erpdash.services.entities import CustomerRepository, LeadRepository
from erpdash.services.ledger import LedgerRegistry, TrashLedger
from erpdash.store.base import Filters, Row, StoreError, TableStore
from erpdash.utils.kv import KeyValueStore, PersistenceError
from erpdash.utils.notify import Notifier

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# ── In-memory collaborators ──────────────────────────────────────

class SpyTableStore(TableStore):
    """Dict-of-lists table store that records every call."""

    def __init__(self):
        self.tables: dict[str, list[Row]] = {}
        self.calls: list[tuple[str, str, dict]] = []
        self._failing: set[tuple[str, str | None]] = set()

    def fail(self, operation: str, table: str | None = None) -> None:
        self._failing.add((operation, table))

    def recover(self) -> None:
        self._failing.clear()

    def calls_to(self, operation: str, table: str | None = None) -> list[tuple[str, str, dict]]:
        return [
            call for call in self.calls
            if call[0] == operation and (table is None or call[1] == table)
        ]

    def seed(self, table: str, **row) -> Row:
        now = datetime.now(timezone.utc)
        stored = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **row}
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    def _check(self, operation: str, table: str) -> None:
        if (operation, table) in self._failing or (operation, None) in self._failing:
            raise StoreError(table, operation, "simulated failure")

    @staticmethod
    def _matches(row: Row, filters: Filters | None) -> bool:
        return all(row.get(key) == value for key, value in (filters or {}).items())

    async def select(self, table, filters=None, order_by=None, descending=True):
        self.calls.append(("select", table, dict(filters or {})))
        self._check("select", table)
        rows = [dict(r) for r in self.tables.get(table, []) if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: str(r.get(order_by) or ""), reverse=descending)
        return rows

    async def insert(self, table, row):
        self.calls.append(("insert", table, dict(row)))
        self._check("insert", table)
        now = datetime.now(timezone.utc)
        stored = {"created_at": now, "updated_at": now, **row}
        stored.setdefault("id", str(uuid.uuid4()))
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    async def update(self, table, filters, patch):
        self.calls.append(("update", table, dict(patch)))
        self._check("update", table)
        updated = []
        for row in self.tables.get(table, []):
            if self._matches(row, filters):
                row.update(patch)
                updated.append(dict(row))
        return updated

    async def delete(self, table, filters):
        self.calls.append(("delete", table, dict(filters)))
        self._check("delete", table)
        rows = self.tables.get(table, [])
        keep = [r for r in rows if not self._matches(r, filters)]
        self.tables[table] = keep
        return len(rows) - len(keep)


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self.data: dict[str, str] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    async def get(self, key):
        if self.fail_reads:
            raise PersistenceError("simulated read failure")
        return self.data.get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise PersistenceError("simulated write failure")
        self.writes += 1
        self.data[key] = value


class RecordingNotifier(Notifier):
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, kind, message):
        self.messages.append((kind, message))

    def of_kind(self, kind: str) -> list[str]:
        return [message for k, message in self.messages if k == kind]


# ── Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def tables() -> SpyTableStore:
    return SpyTableStore()


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def session() -> UserSession:
    return UserSession(user_id=USER_ID)


@pytest.fixture
def anonymous() -> UserSession:
    return UserSession()


@pytest.fixture
def registry(kv, tables, notifier) -> LedgerRegistry:
    return LedgerRegistry(kv, tables, notifier, key_prefix="deletedItems")


@pytest_asyncio.fixture
async def ledger(kv, tables, notifier) -> TrashLedger:
    ledger = TrashLedger(USER_ID, kv, tables, notifier, key_prefix="deletedItems")
    await ledger.load()
    return ledger


@pytest.fixture
def customers(session, tables, notifier) -> CustomerRepository:
    return CustomerRepository(session, tables, notifier)


@pytest.fixture
def leads(session, tables, notifier) -> LeadRepository:
    return LeadRepository(session, tables, notifier)


@pytest_asyncio.fixture
async def client(tables, kv, notifier, registry) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with every store swapped for its in-memory fake."""
    app.dependency_overrides[get_table_store] = lambda: tables
    app.dependency_overrides[get_kv_store] = lambda: kv
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_ledger_registry] = lambda: registry

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token(USER_ID)}"}


@pytest.fixture
def other_auth_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token(OTHER_USER_ID)}"}


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "ledger: Trash ledger tests")
    config.addinivalue_line("markers", "api: HTTP route tests")
