"""Tests for the SQLAlchemy table store that need no live database."""

from datetime import date, datetime, timezone

import pytest

from erpdash.database import Base
from erpdash.store import StoreError
from erpdash.store.sql import SqlTableStore, coerce_value
from erpdash.schemas.trash import KIND_TABLES


@pytest.fixture
def store() -> SqlTableStore:
    def no_sessions():
        raise AssertionError("no database session expected")

    return SqlTableStore(session_factory=no_sessions)


@pytest.mark.unit
class TestCoerceValue:
    def test_iso_datetime_for_timestamp_column(self):
        column = Base.metadata.tables["clients"].c.created_at

        assert coerce_value(column, "2026-01-02T03:04:05Z") == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_iso_date_for_date_column(self):
        column = Base.metadata.tables["invoices"].c.issue_date

        assert coerce_value(column, "2026-01-02") == date(2026, 1, 2)

    def test_other_values_pass_through(self):
        table = Base.metadata.tables["clients"]

        assert coerce_value(table.c.company_name, "2026-01-02") == "2026-01-02"
        assert coerce_value(table.c.created_at, None) is None

    def test_every_kind_table_is_declared(self):
        assert set(KIND_TABLES.values()) <= set(Base.metadata.tables)


@pytest.mark.unit
@pytest.mark.asyncio
class TestValidation:
    async def test_unknown_table(self, store):
        with pytest.raises(StoreError, match="unknown table"):
            await store.select("widgets")

    async def test_unknown_insert_column(self, store):
        with pytest.raises(StoreError, match="colour"):
            await store.insert("clients", {"company_name": "Acme", "colour": "red"})

    async def test_unknown_filter_column(self, store):
        with pytest.raises(StoreError, match="filter column"):
            await store.delete("clients", {"owner": "user-1"})

    async def test_bad_date_value(self, store):
        with pytest.raises(StoreError, match="invalid value"):
            await store.update("invoices", {"id": "i-1"}, {"issue_date": "someday"})

    async def test_unknown_order_column(self, store):
        with pytest.raises(StoreError, match="order by"):
            await store.select("clients", {"user_id": "user-1"}, order_by="rank")
