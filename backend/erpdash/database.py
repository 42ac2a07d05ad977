"""Database engine, session factory, and the declarative base.

Every backing table (clients, tasks, meetings, ...) is declared on `Base`
so the SQL table store can resolve table names to Core `Table` objects.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from erpdash.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=20,
    max_overflow=10,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    """Per-user ERP tables."""
    pass
