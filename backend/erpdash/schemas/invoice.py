"""Pydantic schemas for Invoice CRUD operations."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

InvoiceStatus = Literal["draft", "sent", "paid", "overdue"]


class InvoiceCreate(BaseModel):
    number: str = Field(..., min_length=1, max_length=50)
    issue_date: date
    due_date: date
    client_id: str | None = None
    project_id: str | None = None
    status: InvoiceStatus = "draft"
    subtotal: float = Field(0, ge=0)
    tax: float = Field(0, ge=0)
    total: float = Field(0, ge=0)
    notes: str | None = None


class InvoiceUpdate(BaseModel):
    number: str | None = Field(None, min_length=1, max_length=50)
    issue_date: date | None = None
    due_date: date | None = None
    client_id: str | None = None
    project_id: str | None = None
    status: InvoiceStatus | None = None
    subtotal: float | None = Field(None, ge=0)
    tax: float | None = Field(None, ge=0)
    total: float | None = Field(None, ge=0)
    notes: str | None = None


class InvoiceOut(BaseModel):
    id: str
    user_id: str
    number: str
    issue_date: date
    due_date: date
    client_id: str | None = None
    project_id: str | None = None
    status: str | None = None
    subtotal: float = 0
    tax: float = 0
    total: float = 0
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
