"""Pydantic schemas for Payment CRUD operations."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class PaymentCreate(BaseModel):
    amount: float = Field(..., gt=0)
    payment_date: date
    method: str = Field(..., min_length=1, max_length=50)
    invoice_id: str | None = None
    project_id: str | None = None
    reference: str | None = None
    notes: str | None = None


class PaymentUpdate(BaseModel):
    amount: float | None = Field(None, gt=0)
    payment_date: date | None = None
    method: str | None = Field(None, min_length=1, max_length=50)
    invoice_id: str | None = None
    project_id: str | None = None
    reference: str | None = None
    notes: str | None = None


class PaymentOut(BaseModel):
    id: str
    user_id: str
    amount: float
    payment_date: date
    method: str
    invoice_id: str | None = None
    project_id: str | None = None
    reference: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
