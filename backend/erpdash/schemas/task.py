"""Pydantic schemas for Task CRUD operations."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    project_id: str | None = None
    duration: int | None = Field(None, ge=0)
    status: str | None = None
    assigned_to: str | None = None
    priority: str | None = None
    due_date: date | None = None


class TaskUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    project_id: str | None = None
    duration: int | None = Field(None, ge=0)
    status: str | None = None
    assigned_to: str | None = None
    priority: str | None = None
    due_date: date | None = None


class TaskOut(BaseModel):
    id: str
    user_id: str
    name: str
    description: str | None = None
    project_id: str | None = None
    duration: int | None = None
    status: str | None = None
    assigned_to: str | None = None
    priority: str | None = None
    due_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
