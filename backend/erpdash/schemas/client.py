"""Pydantic schemas for Client (customer) CRUD operations."""

from datetime import datetime

from pydantic import BaseModel, Field


class ClientCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=255)
    manager: str | None = None
    industry: str | None = None
    classification: str | None = None
    notes: str | None = None


class ClientUpdate(BaseModel):
    company_name: str | None = Field(None, min_length=1, max_length=255)
    manager: str | None = None
    industry: str | None = None
    classification: str | None = None
    notes: str | None = None


class ClientOut(BaseModel):
    id: str
    user_id: str
    company_name: str
    manager: str | None = None
    industry: str | None = None
    classification: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
