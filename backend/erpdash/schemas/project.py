"""Pydantic schemas for Project CRUD operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ProjectStatus = Literal["active", "completed", "on_hold"]


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    status: ProjectStatus = "active"
    client_id: str | None = None
    manager: str | None = None
    budget: float | None = Field(None, ge=0)
    duration_days: int | None = Field(None, ge=0)
    notes: str | None = None


class ProjectUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    status: ProjectStatus | None = None
    client_id: str | None = None
    manager: str | None = None
    budget: float | None = Field(None, ge=0)
    duration_days: int | None = Field(None, ge=0)
    notes: str | None = None


class ProjectOut(BaseModel):
    id: str
    user_id: str
    name: str
    status: str | None = None
    client_id: str | None = None
    manager: str | None = None
    budget: float | None = None
    duration_days: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
