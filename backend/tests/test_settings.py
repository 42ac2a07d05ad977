"""Tests for per-user currency and tax settings."""

import pytest

from erpdash.auth.session import UserSession
from erpdash.schemas.common import ErrorCode
from erpdash.services.user_settings import SettingsRepository

from conftest import OTHER_USER_ID, USER_ID


@pytest.fixture
def repo(session, tables, notifier) -> SettingsRepository:
    return SettingsRepository(session, tables, notifier)


@pytest.mark.asyncio
class TestSettingsRepository:
    async def test_defaults_when_nothing_saved(self, repo):
        current = await repo.get()

        assert current.id is None
        assert current.currency_symbol == "$"
        assert current.currency_code == "USD"
        assert current.tax_enabled is False
        assert current.tax_rate == 19
        assert current.tax_name == "VAT"

    async def test_first_save_inserts_row(self, repo, tables):
        outcome = await repo.save({"currency_symbol": "€", "currency_code": "EUR"})

        assert outcome.ok
        assert outcome.value.id
        [(_, table, row)] = tables.calls_to("insert")
        assert table == "user_settings"
        assert row["user_id"] == USER_ID
        assert row["currency_code"] == "EUR"
        assert row["tax_name"] == "VAT"

    async def test_second_save_updates_existing_row(self, repo, tables):
        await repo.save({"currency_code": "EUR"})

        outcome = await repo.save({"tax_enabled": True, "tax_rate": 21})

        assert outcome.ok
        assert len(tables.tables["user_settings"]) == 1
        stored = await repo.get()
        assert stored.currency_code == "EUR"
        assert stored.tax_enabled is True
        assert stored.tax_rate == 21

    async def test_settings_are_per_user(self, repo, tables):
        tables.seed("user_settings", user_id=OTHER_USER_ID, currency_symbol="£", currency_code="GBP",
                    tax_enabled=True, tax_rate=20, tax_name="VAT")

        current = await repo.get()

        assert current.currency_code == "USD"

    async def test_invalid_rate_is_rejected(self, repo, tables):
        outcome = await repo.save({"tax_rate": 250})

        assert outcome.error == ErrorCode.VALIDATION_FAILURE
        assert tables.calls_to("insert") == []

    async def test_store_failure(self, repo, tables, notifier):
        tables.fail("insert", "user_settings")

        outcome = await repo.save({"currency_code": "EUR"})

        assert outcome.error == ErrorCode.STORE_FAILURE
        assert "Failed to save settings." in notifier.of_kind("error")

    async def test_anonymous_save_is_rejected(self, tables):
        repo = SettingsRepository(UserSession(), tables)

        outcome = await repo.save({"currency_code": "EUR"})

        assert outcome.error == ErrorCode.NOT_AUTHENTICATED
        assert tables.calls == []
