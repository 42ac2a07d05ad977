"""The structured-table store port.

Rows are plain dicts keyed by column name. Filters are equality matches
combined with AND. Every failure (network, constraint violation, unknown
table or column) is raised as `StoreError` so callers only need to handle
one exception type.
"""

import abc
from typing import Any

Row = dict[str, Any]
Filters = dict[str, Any]


class StoreError(Exception):
    """A backing-table call failed."""

    def __init__(self, table: str, operation: str, message: str):
        self.table = table
        self.operation = operation
        self.message = message
        super().__init__(f"{operation} on {table} failed: {message}")


class TableStore(abc.ABC):
    @abc.abstractmethod
    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = True,
    ) -> list[Row]:
        """Return matching rows, optionally ordered by one column."""

    @abc.abstractmethod
    async def insert(self, table: str, row: Row) -> Row:
        """Insert one row and return it as stored (with server defaults)."""

    @abc.abstractmethod
    async def update(self, table: str, filters: Filters, patch: Row) -> list[Row]:
        """Apply `patch` to every matching row; return the updated rows."""

    @abc.abstractmethod
    async def delete(self, table: str, filters: Filters) -> int:
        """Delete every matching row; return how many were removed."""
