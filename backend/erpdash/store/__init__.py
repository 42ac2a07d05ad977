"""Backing-table access: the `TableStore` port and its SQL adapter."""

from erpdash.store.base import StoreError, TableStore  # noqa: F401
