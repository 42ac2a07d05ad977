"""Pydantic schemas for Meeting CRUD operations."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

MeetingStatus = Literal["scheduled", "completed", "canceled"]

_TIME_PATTERN = r"^\d{2}:\d{2}$"


class MeetingCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255)
    meeting_date: date
    start_time: str = Field(..., pattern=_TIME_PATTERN)
    end_time: str = Field(..., pattern=_TIME_PATTERN)
    location: str | None = None
    participants: list[str] = []
    status: MeetingStatus = "scheduled"
    notes: str | None = None
    project_id: str | None = None


class MeetingUpdate(BaseModel):
    subject: str | None = Field(None, min_length=1, max_length=255)
    meeting_date: date | None = None
    start_time: str | None = Field(None, pattern=_TIME_PATTERN)
    end_time: str | None = Field(None, pattern=_TIME_PATTERN)
    location: str | None = None
    participants: list[str] | None = None
    status: MeetingStatus | None = None
    notes: str | None = None
    project_id: str | None = None


class MeetingOut(BaseModel):
    id: str
    user_id: str
    subject: str
    meeting_date: date
    start_time: str
    end_time: str
    starts_at: datetime | None = None
    location: str | None = None
    participants: list[str] = []
    status: str | None = None
    notes: str | None = None
    project_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
