"""Pydantic schemas for the trash ledger."""

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

LEDGER_FORMAT_VERSION = 1


class ItemKind(str, enum.Enum):
    """Closed set of record kinds that can sit in the trash."""

    CUSTOMER = "customer"
    TASK = "task"
    MEETING = "meeting"
    INVOICE = "invoice"
    PROJECT = "project"
    TEAM = "team"
    LEAD = "lead"
    PAYMENT = "payment"


# Backing table per kind. Must cover every ItemKind; there is no fallback.
KIND_TABLES: dict[ItemKind, str] = {
    ItemKind.CUSTOMER: "clients",
    ItemKind.TASK: "tasks",
    ItemKind.MEETING: "meetings",
    ItemKind.INVOICE: "invoices",
    ItemKind.PROJECT: "projects",
    ItemKind.TEAM: "teams",
    ItemKind.LEAD: "leads",
    ItemKind.PAYMENT: "payments",
}

ITEM_KIND_LABELS = {
    ItemKind.CUSTOMER: "Customer",
    ItemKind.TASK: "Task",
    ItemKind.MEETING: "Meeting",
    ItemKind.INVOICE: "Invoice",
    ItemKind.PROJECT: "Project",
    ItemKind.TEAM: "Team Member",
    ItemKind.LEAD: "Lead",
    ItemKind.PAYMENT: "Payment",
}


class DeletedItemCreate(BaseModel):
    """What a caller hands to the ledger after a confirmed live delete."""

    id: str = Field(..., min_length=1)
    name: str
    kind: ItemKind
    payload: dict[str, Any]


class DeletedItem(BaseModel):
    """A captured ledger entry. Never mutated after capture."""

    id: str
    name: str
    kind: ItemKind
    payload: dict[str, Any]
    deleted_at: datetime
    original_created_at: datetime | None = None
    original_updated_at: datetime | None = None

    model_config = {"frozen": True}


class LedgerDocument(BaseModel):
    """The persisted form of one owner's ledger."""

    version: int = LEDGER_FORMAT_VERSION
    items: list[DeletedItem] = []


class TrashListResponse(BaseModel):
    items: list[DeletedItem]
    total_count: int


class RestoreResult(BaseModel):
    id: str
    kind: ItemKind
    name: str
    table: str
    original_created_at: datetime | None = None
    original_updated_at: datetime | None = None


class PurgeResult(BaseModel):
    id: str
    purged: bool = True


class ClearResult(BaseModel):
    purged_count: int


class TrashedResult(BaseModel):
    """Response of a delete: the live row is gone; `entry` is its trash copy."""

    id: str
    entry: DeletedItem | None = None
    message: str | None = None
