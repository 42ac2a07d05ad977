"""FastAPI providers for the store adapters, ledgers and repositories.

The adapters are process-wide singletons. Tests swap them out with
`app.dependency_overrides`.
"""

from typing import Callable

from fastapi import Depends

from erpdash.auth.deps import get_session
from erpdash.auth.session import UserSession
from erpdash.services.entities import CustomerRepository, LeadRepository
from erpdash.services.ledger import LedgerRegistry, TrashLedger
from erpdash.services.repository import EntityRepository
from erpdash.services.user_settings import SettingsRepository
from erpdash.store import TableStore
from erpdash.store.sql import SqlTableStore
from erpdash.utils.kv import KeyValueStore, RedisKeyValueStore
from erpdash.utils.notify import LoggingNotifier, Notifier

_table_store = SqlTableStore()
_kv_store = RedisKeyValueStore()
_notifier = LoggingNotifier()
_ledger_registry = LedgerRegistry(_kv_store, _table_store, _notifier)


def get_table_store() -> TableStore:
    return _table_store


def get_kv_store() -> KeyValueStore:
    return _kv_store


def get_notifier() -> Notifier:
    return _notifier


def get_ledger_registry() -> LedgerRegistry:
    return _ledger_registry


async def get_ledger(
    session: UserSession = Depends(get_session),
    registry: LedgerRegistry = Depends(get_ledger_registry),
) -> TrashLedger:
    return await registry.get(session.current_user())


def repository_provider(repo_cls: type[EntityRepository]) -> Callable[..., EntityRepository]:
    """Build a dependency that yields `repo_cls` bound to the caller's session."""

    def provide(
        session: UserSession = Depends(get_session),
        tables: TableStore = Depends(get_table_store),
        notifier: Notifier = Depends(get_notifier),
    ) -> EntityRepository:
        return repo_cls(session, tables, notifier)

    provide.__name__ = f"get_{repo_cls.__name__}"
    return provide


get_customer_repository = repository_provider(CustomerRepository)
get_lead_repository = repository_provider(LeadRepository)


def get_settings_repository(
    session: UserSession = Depends(get_session),
    tables: TableStore = Depends(get_table_store),
    notifier: Notifier = Depends(get_notifier),
) -> SettingsRepository:
    return SettingsRepository(session, tables, notifier)
