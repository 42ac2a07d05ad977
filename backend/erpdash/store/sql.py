"""SQLAlchemy-backed table store.

Resolves table names against `Base.metadata` and runs Core statements in
short-lived async sessions, one transaction per call. Values arriving as
JSON (ISO date strings from a trash snapshot, for instance) are coerced to
the column's Python type before binding, since asyncpg will not accept
strings for DATE/TIMESTAMP parameters.
"""

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy import Date, DateTime, Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from erpdash import models  # noqa: F401 (registers every table on Base)
from erpdash.database import Base, async_session
from erpdash.store.base import Filters, Row, StoreError, TableStore

logger = logging.getLogger(__name__)


def coerce_value(column, value: Any) -> Any:
    """Convert ISO strings to date/datetime for temporal columns."""
    if not isinstance(value, str):
        return value
    if isinstance(column.type, DateTime):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(column.type, Date):
        return date.fromisoformat(value[:10])
    return value


class SqlTableStore(TableStore):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session,
        metadata=Base.metadata,
    ):
        self._session_factory = session_factory
        self._metadata = metadata

    def _table(self, name: str, operation: str) -> Table:
        table = self._metadata.tables.get(name)
        if table is None:
            raise StoreError(name, operation, f"unknown table '{name}'")
        return table

    def _values(self, table: Table, row: Row, operation: str) -> Row:
        unknown = sorted(set(row) - set(table.c.keys()))
        if unknown:
            raise StoreError(
                table.name, operation,
                f"column(s) {', '.join(unknown)} do not exist",
            )
        try:
            return {key: coerce_value(table.c[key], value) for key, value in row.items()}
        except ValueError as e:
            raise StoreError(table.name, operation, f"invalid value: {e}") from e

    def _where(self, table: Table, filters: Filters, operation: str) -> list:
        unknown = sorted(set(filters) - set(table.c.keys()))
        if unknown:
            raise StoreError(
                table.name, operation,
                f"filter column(s) {', '.join(unknown)} do not exist",
            )
        return [table.c[key] == value for key, value in filters.items()]

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = True,
    ) -> list[Row]:
        t = self._table(table, "select")
        stmt = select(t).where(*self._where(t, filters or {}, "select"))
        if order_by:
            if order_by not in t.c:
                raise StoreError(table, "select", f"cannot order by unknown column '{order_by}'")
            column = t.c[order_by]
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Select on {table} failed: {e}")
            raise StoreError(table, "select", str(e)) from e

    async def insert(self, table: str, row: Row) -> Row:
        t = self._table(table, "insert")
        values = self._values(t, row, "insert")
        stmt = insert(t).values(**values).returning(*t.c)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    return dict(result.mappings().one())
        except SQLAlchemyError as e:
            logger.error(f"Insert into {table} failed: {e}")
            raise StoreError(table, "insert", str(e)) from e

    async def update(self, table: str, filters: Filters, patch: Row) -> list[Row]:
        t = self._table(table, "update")
        values = self._values(t, patch, "update")
        stmt = (
            update(t)
            .where(*self._where(t, filters, "update"))
            .values(**values)
            .returning(*t.c)
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Update on {table} failed: {e}")
            raise StoreError(table, "update", str(e)) from e

    async def delete(self, table: str, filters: Filters) -> int:
        t = self._table(table, "delete")
        stmt = delete(t).where(*self._where(t, filters, "delete"))
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    return result.rowcount or 0
        except SQLAlchemyError as e:
            logger.error(f"Delete on {table} failed: {e}")
            raise StoreError(table, "delete", str(e)) from e
