"""Per-user currency and tax settings (one row per user)."""

import logging

from pydantic import ValidationError

from erpdash.auth.session import UserSession
from erpdash.schemas.common import ErrorCode, Outcome
from erpdash.schemas.settings import UserSettingsOut, UserSettingsUpdate
from erpdash.services.repository import first_validation_error
from erpdash.store.base import StoreError, TableStore
from erpdash.utils.notify import Notifier, NullNotifier

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "user_settings"


class SettingsRepository:
    def __init__(self, session: UserSession, tables: TableStore, notifier: Notifier | None = None):
        self.session = session
        self.tables = tables
        self.notifier = notifier or NullNotifier()

    async def get(self) -> UserSettingsOut:
        """Stored settings, or the defaults when there is no row (or no user)."""
        owner = self.session.current_user()
        if not owner:
            return UserSettingsOut()
        try:
            rows = await self.tables.select(SETTINGS_TABLE, {"user_id": owner})
        except StoreError as e:
            logger.error(f"Error loading settings for user {owner}: {e}")
            return UserSettingsOut()
        if not rows:
            return UserSettingsOut()
        return UserSettingsOut.model_validate(rows[0])

    async def save(self, fields) -> Outcome[UserSettingsOut]:
        owner = self.session.current_user()
        if not owner:
            self.notifier.notify("error", "You must be logged in to save settings.")
            return Outcome.failure(ErrorCode.NOT_AUTHENTICATED, "You must be logged in to save settings.")

        if isinstance(fields, UserSettingsUpdate):
            fields = fields.model_dump(exclude_unset=True)
        try:
            patch = UserSettingsUpdate.model_validate(fields).model_dump(exclude_unset=True, exclude_none=True)
        except ValidationError as e:
            message = f"Invalid settings: {first_validation_error(e)}"
            self.notifier.notify("error", message)
            return Outcome.failure(ErrorCode.VALIDATION_FAILURE, message)

        current = await self.get()
        merged = current.model_dump(exclude={"id"}) | patch

        try:
            if current.id:
                rows = await self.tables.update(SETTINGS_TABLE, {"id": current.id, "user_id": owner}, merged)
                stored = rows[0] if rows else None
            else:
                stored = await self.tables.insert(SETTINGS_TABLE, {**merged, "user_id": owner})
        except StoreError as e:
            logger.error(f"Error saving settings for user {owner}: {e}")
            self.notifier.notify("error", "Failed to save settings.")
            return Outcome.failure(ErrorCode.STORE_FAILURE, "Failed to save settings.")

        if stored is None:
            self.notifier.notify("error", "Failed to save settings.")
            return Outcome.failure(ErrorCode.NOT_FOUND, "Settings row disappeared while saving")

        logger.info(f"Saved settings for user {owner}")
        return Outcome.success(UserSettingsOut.model_validate(stored))
