"""Column helpers shared by every per-user table."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def id_column():
    return mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )


def owner_column():
    return mapped_column(String(36), nullable=False, index=True)


def created_column():
    return mapped_column(DateTime(timezone=True), default=utcnow, index=True)


def updated_column():
    return mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
