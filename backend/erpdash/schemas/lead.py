"""Pydantic schemas for Lead CRUD operations."""

from datetime import datetime

from pydantic import BaseModel, Field


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    source: str = Field(..., min_length=1, max_length=100)
    phone: str | None = None
    estimated_budget: float = Field(0, ge=0)
    percentage: int = Field(10, ge=0, le=100)
    notes: str | None = None
    positive_qualities: str | None = None
    negative_qualities: str | None = None


class LeadUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=3, max_length=255)
    source: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = None
    estimated_budget: float | None = Field(None, ge=0)
    percentage: int | None = Field(None, ge=0, le=100)
    notes: str | None = None
    positive_qualities: str | None = None
    negative_qualities: str | None = None


class LeadOut(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    source: str
    phone: str | None = None
    estimated_budget: float = 0
    percentage: int = 10
    notes: str | None = None
    positive_qualities: str | None = None
    negative_qualities: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
