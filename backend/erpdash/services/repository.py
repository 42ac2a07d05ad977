"""Generic per-user CRUD repository over one backing table.

Each entity kind gets a subclass (see `erpdash.services.entities`) that
names its table, schemas and ordering column. Every read and write is
scoped to the session's current user via the `user_id` column.

Outcomes, never exceptions: validation, authentication, not-found and
store failures are all returned as a failed `Outcome`, logged, and pushed
to the notifier. The local cache (`items`) is only replaced after a
successful call, and always wholesale by re-running `list()`.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from erpdash.auth.session import UserSession
from erpdash.schemas.common import ErrorCode, Outcome
from erpdash.schemas.trash import ItemKind
from erpdash.store.base import Row, StoreError, TableStore
from erpdash.utils.notify import Notifier, NullNotifier

logger = logging.getLogger(__name__)

OutT = TypeVar("OutT", bound=BaseModel)


def first_validation_error(exc: ValidationError) -> str:
    """Return the first pydantic error as 'field: message'."""
    errors = exc.errors()
    if not errors:
        return "invalid data"
    err = errors[0]
    field = ".".join(str(loc) for loc in err.get("loc", ()))
    return f"{field}: {err['msg']}" if field else err["msg"]


class EntityRepository(Generic[OutT]):
    kind: ItemKind
    table: str
    label: str
    label_plural: str
    order_by: str = "created_at"
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    out_schema: type[OutT]

    def __init__(
        self,
        session: UserSession,
        tables: TableStore,
        notifier: Notifier | None = None,
    ):
        self.session = session
        self.tables = tables
        self.notifier = notifier or NullNotifier()
        self.items: list[OutT] = []
        self.loading = False

    @property
    def owner_id(self) -> str | None:
        return self.session.current_user()

    @property
    def required_fields(self) -> set[str]:
        return {
            name for name, field in self.create_schema.model_fields.items()
            if field.is_required()
        }

    # ── Hooks for subclasses ─────────────────────────────────

    def prepare_insert(self, values: Row) -> Row:
        """Adjust validated create values before the insert."""
        return values

    def prepare_update(self, patch: Row) -> Row:
        """Adjust a validated partial update before it is applied."""
        return patch

    def trash_label(self, entity: OutT) -> str:
        """Human-readable name captured when the entity goes to trash."""
        return str(getattr(entity, "name", entity.id))

    # ── Helpers ──────────────────────────────────────────────

    def _to_out(self, row: Row) -> OutT:
        return self.out_schema.model_validate(row)

    def _fail(self, error: ErrorCode, message: str, value: Any = None) -> Outcome:
        if error == ErrorCode.STORE_FAILURE:
            logger.error(f"{self.table}: {message}")
        else:
            logger.warning(f"{self.table}: {message}")
        self.notifier.notify("error", message)
        return Outcome.failure(error, message, value=value)

    def _not_authenticated(self, action: str) -> Outcome:
        return self._fail(
            ErrorCode.NOT_AUTHENTICATED,
            f"You must be logged in to {action} {self.label_plural}",
        )

    @staticmethod
    def _as_dict(fields: Any, exclude_unset: bool = False) -> Any:
        if isinstance(fields, BaseModel):
            return fields.model_dump(exclude_unset=exclude_unset)
        return fields

    # ── Public contract ──────────────────────────────────────

    async def list(self) -> list[OutT]:
        """Fetch the owner's rows, newest first, and replace the cache.

        Unauthenticated sessions get an empty list. A store failure is
        notified and leaves the previous cache in place.
        """
        owner = self.owner_id
        if not owner:
            self.items = []
            return []

        self.loading = True
        try:
            rows = await self.tables.select(
                self.table, {"user_id": owner}, order_by=self.order_by
            )
        except StoreError as e:
            logger.error(f"Error fetching {self.label_plural}: {e}")
            self.notifier.notify("error", f"Failed to fetch {self.label_plural}")
            return list(self.items)
        finally:
            self.loading = False

        self.items = [self._to_out(row) for row in rows]
        return list(self.items)

    async def get(self, entity_id: str) -> Outcome[OutT]:
        owner = self.owner_id
        if not owner:
            return Outcome.failure(
                ErrorCode.NOT_AUTHENTICATED, f"You must be logged in to view {self.label_plural}"
            )
        try:
            rows = await self.tables.select(self.table, {"id": entity_id, "user_id": owner})
        except StoreError as e:
            logger.error(f"Error loading {self.label} {entity_id}: {e}")
            return Outcome.failure(ErrorCode.STORE_FAILURE, f"Failed to load {self.label}")
        if not rows:
            return Outcome.failure(ErrorCode.NOT_FOUND, f"{self.label.capitalize()} not found: {entity_id}")
        return Outcome.success(self._to_out(rows[0]))

    async def create(self, fields: Any) -> Outcome[OutT]:
        owner = self.owner_id
        if not owner:
            return self._not_authenticated("create")

        try:
            data = self.create_schema.model_validate(self._as_dict(fields))
        except ValidationError as e:
            return self._fail(
                ErrorCode.VALIDATION_FAILURE,
                f"Invalid {self.label}: {first_validation_error(e)}",
            )

        values = self.prepare_insert(data.model_dump())
        values["user_id"] = owner

        try:
            stored = await self.tables.insert(self.table, values)
        except StoreError as e:
            logger.error(f"Error creating {self.label}: {e}")
            return self._fail(ErrorCode.STORE_FAILURE, f"Failed to create {self.label}")

        entity = self._to_out(stored)
        logger.info(f"Created {self.label} {entity.id} for user {owner}")
        await self.list()
        self.notifier.notify("success", f"{self.label.capitalize()} created successfully")
        return Outcome.success(entity)

    async def update(self, entity_id: str, fields: Any) -> Outcome[OutT]:
        owner = self.owner_id
        if not owner:
            return self._not_authenticated("update")

        try:
            data = self.update_schema.model_validate(self._as_dict(fields, exclude_unset=True))
        except ValidationError as e:
            return self._fail(
                ErrorCode.VALIDATION_FAILURE,
                f"Invalid {self.label}: {first_validation_error(e)}",
            )

        patch = data.model_dump(exclude_unset=True)
        cleared = sorted(k for k, v in patch.items() if v is None and k in self.required_fields)
        if cleared:
            return self._fail(
                ErrorCode.VALIDATION_FAILURE,
                f"Invalid {self.label}: {', '.join(cleared)} cannot be empty",
            )
        if not patch:
            return self._fail(ErrorCode.VALIDATION_FAILURE, f"No {self.label} fields to update")

        patch = self.prepare_update(patch)
        patch["updated_at"] = datetime.now(timezone.utc)

        try:
            rows = await self.tables.update(
                self.table, {"id": entity_id, "user_id": owner}, patch
            )
        except StoreError as e:
            logger.error(f"Error updating {self.label} {entity_id}: {e}")
            return self._fail(ErrorCode.STORE_FAILURE, f"Failed to update {self.label}")

        if not rows:
            return self._fail(
                ErrorCode.NOT_FOUND, f"{self.label.capitalize()} not found: {entity_id}"
            )

        entity = self._to_out(rows[0])
        logger.info(f"Updated {self.label} {entity_id}")
        await self.list()
        self.notifier.notify("success", f"{self.label.capitalize()} updated successfully")
        return Outcome.success(entity)

    async def _delete_row(self, entity_id: str, owner: str) -> Outcome[bool]:
        try:
            removed = await self.tables.delete(self.table, {"id": entity_id, "user_id": owner})
        except StoreError as e:
            logger.error(f"Error deleting {self.label} {entity_id}: {e}")
            return Outcome.failure(
                ErrorCode.STORE_FAILURE, f"Failed to delete {self.label}", value=False
            )
        if not removed:
            return Outcome.failure(
                ErrorCode.NOT_FOUND,
                f"{self.label.capitalize()} not found: {entity_id}",
                value=False,
            )
        return Outcome.success(True)

    async def delete(self, entity_id: str) -> Outcome[bool]:
        """Remove the row. Does not touch the trash ledger."""
        owner = self.owner_id
        if not owner:
            return self._not_authenticated("delete")

        outcome = await self._delete_row(entity_id, owner)
        if not outcome.ok:
            return self._fail(outcome.error, outcome.message, value=False)

        logger.info(f"Deleted {self.label} {entity_id}")
        await self.list()
        self.notifier.notify("success", f"{self.label.capitalize()} deleted successfully")
        return outcome
