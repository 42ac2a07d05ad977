"""Trash ledger: a per-user, persisted registry of soft-deleted records.

A ledger entry exists exactly when its record is not live. Entries are
added only after the live row was deleted, and removed only after the
row was re-inserted, so every mutation here is "persist first, then swap
memory". A failed persist leaves the in-memory ledger as it was.

Storage is one JSON document per owner:

    {"version": 1, "items": [{"id": ..., "name": ..., "kind": ..., ...}]}

Documents written by older clients (a bare list of
``{id, name, type, data, deletedAt}``) are migrated on load.
"""

import asyncio
import json
import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from erpdash.config import settings
from erpdash.schemas.common import ErrorCode, Outcome
from erpdash.schemas.trash import (
    ITEM_KIND_LABELS,
    KIND_TABLES,
    LEDGER_FORMAT_VERSION,
    DeletedItem,
    DeletedItemCreate,
    ItemKind,
    LedgerDocument,
)
from erpdash.store.base import StoreError, TableStore
from erpdash.utils.kv import KeyValueStore, PersistenceError
from erpdash.utils.notify import Notifier, NullNotifier

logger = logging.getLogger(__name__)

_timestamp = TypeAdapter(datetime)


def table_for_kind(kind: ItemKind | str) -> str:
    """Return the backing table for a kind.

    Raises ValueError for anything outside ItemKind.
    """
    return KIND_TABLES[ItemKind(kind)]


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    try:
        return _timestamp.validate_python(value)
    except ValidationError:
        return None


def _migrate_legacy_meeting(data: dict) -> dict:
    """Older clients stored a meeting's start under ``datetime``."""
    if "datetime" not in data:
        return data
    data = dict(data)
    value = data.pop("datetime")
    data.setdefault("starts_at", value)
    starts_at = _parse_timestamp(value)
    if starts_at is not None:
        data.setdefault("meeting_date", starts_at.date().isoformat())
        data.setdefault("start_time", starts_at.strftime("%H:%M"))
        data.setdefault("end_time", data["start_time"])
    return data


def _migrate_legacy(raw: dict) -> dict:
    data = raw.get("data") or {}
    if raw.get("type") == ItemKind.MEETING.value:
        data = _migrate_legacy_meeting(data)
    return {
        "id": raw.get("id"),
        "name": raw.get("name"),
        "kind": raw.get("type"),
        "payload": data,
        "deleted_at": raw.get("deletedAt"),
        "original_created_at": _parse_timestamp(data.get("created_at")),
        "original_updated_at": _parse_timestamp(data.get("updated_at")),
    }


def parse_ledger_document(text: str | None) -> list[DeletedItem]:
    """Decode a stored ledger, skipping entries that cannot be read."""
    if not text:
        return []
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Discarding unreadable trash ledger: {e}")
        return []

    if isinstance(doc, list):
        raw_items = [_migrate_legacy(item) for item in doc if isinstance(item, dict)]
    elif isinstance(doc, dict) and isinstance(doc.get("items"), list):
        version = doc.get("version")
        if version != LEDGER_FORMAT_VERSION:
            logger.warning(f"Trash ledger has format version {version}, reading as {LEDGER_FORMAT_VERSION}")
        raw_items = doc["items"]
    else:
        logger.error("Discarding trash ledger with unrecognised layout")
        return []

    items: dict[str, DeletedItem] = {}
    for raw in raw_items:
        try:
            item = DeletedItem.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Skipping unreadable trash entry: {e.errors()[0]['msg']}")
            continue
        items.pop(item.id, None)
        items[item.id] = item
    return list(items.values())


class TrashLedger:
    def __init__(
        self,
        owner_id: str | None,
        storage: KeyValueStore,
        tables: TableStore,
        notifier: Notifier | None = None,
        key_prefix: str | None = None,
    ):
        self.owner_id = owner_id
        self.storage = storage
        self.tables = tables
        self.notifier = notifier or NullNotifier()
        self.key_prefix = key_prefix or settings.trash_key_prefix
        self._items: list[DeletedItem] = []
        self._lock = asyncio.Lock()
        self.loaded = False

    @property
    def storage_key(self) -> str:
        return f"{self.key_prefix}:{self.owner_id}"

    async def load(self) -> None:
        """Read the persisted ledger, or start empty when nothing is stored.

        A failed read leaves the ledger unloaded: writing over a document
        we could not read would drop every entry in it.
        """
        if not self.owner_id:
            self._items = []
            self.loaded = True
            return
        try:
            text = await self.storage.get(self.storage_key)
        except PersistenceError as e:
            logger.error(f"Could not load trash for user {self.owner_id}: {e}")
            self._items = []
            self.loaded = False
            return
        self._items = parse_ledger_document(text)
        self.loaded = True
        logger.info(f"Loaded {len(self._items)} trash entries for user {self.owner_id}")

    async def _ensure_loaded(self) -> bool:
        if not self.loaded:
            await self.load()
        return self.loaded

    async def _persist(self, items: list[DeletedItem]) -> None:
        doc = LedgerDocument(version=LEDGER_FORMAT_VERSION, items=items)
        await self.storage.set(self.storage_key, doc.model_dump_json())

    def _fail(self, error: ErrorCode, message: str, value: Any = None) -> Outcome:
        self.notifier.notify("error", message)
        return Outcome.failure(error, message, value=value)

    def _unavailable(self, value: Any = None) -> Outcome:
        return self._fail(ErrorCode.STORE_FAILURE, "Trash is temporarily unavailable", value=value)

    def _find(self, entry_id: str) -> DeletedItem | None:
        return next((item for item in self._items if item.id == entry_id), None)

    def list_entries(self) -> list[DeletedItem]:
        return list(self._items)

    async def add_entry(self, item: DeletedItemCreate) -> Outcome[DeletedItem]:
        if not self.owner_id:
            return self._fail(ErrorCode.NOT_AUTHENTICATED, "You must be logged in to move items to trash")

        entry = DeletedItem(
            id=item.id,
            name=item.name,
            kind=item.kind,
            payload=dict(item.payload),
            deleted_at=datetime.now(timezone.utc),
            original_created_at=_parse_timestamp(item.payload.get("created_at")),
            original_updated_at=_parse_timestamp(item.payload.get("updated_at")),
        )

        async with self._lock:
            if not await self._ensure_loaded():
                return self._unavailable()
            items = [existing for existing in self._items if existing.id != entry.id]
            items.append(entry)
            try:
                await self._persist(items)
            except PersistenceError as e:
                logger.error(f"Failed to record {entry.kind.value} {entry.id} in trash: {e}")
                return self._fail(ErrorCode.STORE_FAILURE, "Failed to move item to trash")
            self._items = items

        logger.info(f"Moved {entry.kind.value} {entry.id} to trash for user {self.owner_id}")
        self.notifier.notify(
            "success",
            f'{ITEM_KIND_LABELS[entry.kind]} "{entry.name}" has been moved to trash',
        )
        return Outcome.success(entry)

    async def restore_item(self, entry_id: str) -> Outcome[DeletedItem]:
        """Re-insert the entry's payload into its table, then evict it.

        The original id is dropped so the table assigns a new one; the row
        is re-owned by the current user and gets fresh timestamps. On
        success the value is the evicted entry.
        """
        if not self.owner_id:
            return self._fail(ErrorCode.NOT_AUTHENTICATED, "You must be logged in to restore items")

        async with self._lock:
            if not await self._ensure_loaded():
                return self._unavailable()

            entry = self._find(entry_id)
            if entry is None:
                logger.warning(f"Restore requested for missing trash entry {entry_id}")
                return self._fail(ErrorCode.NOT_FOUND, "Item not found in trash")

            try:
                table = table_for_kind(entry.kind)
            except ValueError:
                logger.error(f"Trash entry {entry_id} has unknown kind {entry.kind!r}")
                return self._fail(
                    ErrorCode.VALIDATION_FAILURE,
                    f"Cannot restore item of unknown type '{entry.kind}'",
                )

            now = datetime.now(timezone.utc)
            row = {key: value for key, value in entry.payload.items() if key != "id"}
            row["user_id"] = self.owner_id
            row["created_at"] = now
            row["updated_at"] = now

            kind = ItemKind(entry.kind)
            try:
                await self.tables.insert(table, row)
            except StoreError as e:
                logger.error(f"Error restoring {kind.value} {entry_id}: {e}")
                return self._fail(ErrorCode.STORE_FAILURE, f"Failed to restore {kind.value}")

            remaining = [item for item in self._items if item.id != entry_id]
            try:
                await self._persist(remaining)
            except PersistenceError as e:
                # The row is live again; keeping the entry would allow a duplicate restore.
                logger.error(f"Restored {kind.value} {entry_id} but could not save trash: {e}")
            self._items = remaining

        logger.info(f"Restored {kind.value} {entry_id} into {table}")
        self.notifier.notify(
            "success",
            f'{ITEM_KIND_LABELS[kind]} "{entry.name}" has been restored successfully',
        )
        return Outcome.success(entry)

    async def restore_entry(self, entry_id: str) -> Outcome[bool]:
        """Same as `restore_item`, reporting only whether the restore happened."""
        outcome = await self.restore_item(entry_id)
        if not outcome.ok:
            return Outcome.failure(outcome.error, outcome.message, value=False)
        return Outcome.success(True)

    async def purge_entry(self, entry_id: str) -> Outcome[bool]:
        if not self.owner_id:
            return self._fail(
                ErrorCode.NOT_AUTHENTICATED, "You must be logged in to delete items", value=False
            )

        async with self._lock:
            if not await self._ensure_loaded():
                return self._unavailable(value=False)
            if self._find(entry_id) is None:
                return self._fail(ErrorCode.NOT_FOUND, "Item not found in trash", value=False)
            remaining = [item for item in self._items if item.id != entry_id]
            try:
                await self._persist(remaining)
            except PersistenceError as e:
                logger.error(f"Failed to purge trash entry {entry_id}: {e}")
                return self._fail(ErrorCode.STORE_FAILURE, "Failed to delete item", value=False)
            self._items = remaining

        logger.info(f"Purged trash entry {entry_id} for user {self.owner_id}")
        self.notifier.notify(
            "success", "The item has been permanently deleted and cannot be recovered"
        )
        return Outcome.success(True)

    async def clear_all(self) -> Outcome[int]:
        """Drop every entry. Never touches the backing tables."""
        if not self.owner_id:
            return self._fail(ErrorCode.NOT_AUTHENTICATED, "You must be logged in to empty the trash")

        async with self._lock:
            if not await self._ensure_loaded():
                return self._unavailable()
            count = len(self._items)
            try:
                await self._persist([])
            except PersistenceError as e:
                logger.error(f"Failed to empty trash for user {self.owner_id}: {e}")
                return self._fail(ErrorCode.STORE_FAILURE, "Failed to empty trash")
            self._items = []

        logger.info(f"Emptied trash ({count} entries) for user {self.owner_id}")
        self.notifier.notify("success", "Trash emptied")
        return Outcome.success(count)


class LedgerRegistry:
    """Loaded ledgers by owner, least recently used evicted first.

    Every mutation is persisted before it is applied, so dropping a ledger
    from the cache loses nothing; the next request reloads it. A ledger
    whose load failed is never cached, so the next request retries.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        tables: TableStore,
        notifier: Notifier | None = None,
        key_prefix: str | None = None,
        max_ledgers: int | None = None,
    ):
        self.storage = storage
        self.tables = tables
        self.notifier = notifier
        self.key_prefix = key_prefix
        self.max_ledgers = max_ledgers or settings.trash_ledger_cache_size
        self._ledgers: OrderedDict[str, TrashLedger] = OrderedDict()
        self._lock = asyncio.Lock()

    def _build(self, owner_id: str | None) -> TrashLedger:
        return TrashLedger(
            owner_id, self.storage, self.tables, self.notifier, key_prefix=self.key_prefix
        )

    async def get(self, owner_id: str | None) -> TrashLedger:
        if not owner_id:
            ledger = self._build(None)
            await ledger.load()
            return ledger

        async with self._lock:
            ledger = self._ledgers.get(owner_id)
            if ledger is not None:
                self._ledgers.move_to_end(owner_id)
                return ledger

            ledger = self._build(owner_id)
            await ledger.load()
            if ledger.loaded:
                self._ledgers[owner_id] = ledger
                while len(self._ledgers) > self.max_ledgers:
                    evicted, _ = self._ledgers.popitem(last=False)
                    logger.debug(f"Evicted cached trash ledger for user {evicted}")
            return ledger
