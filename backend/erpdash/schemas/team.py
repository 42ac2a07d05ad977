"""Pydantic schemas for TeamMember CRUD operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

MemberStatus = Literal["active", "inactive"]


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    role: str = Field(..., min_length=1, max_length=100)
    status: MemberStatus = "active"
    phone: str | None = None
    avatar_url: str | None = None


class TeamMemberUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=3, max_length=255)
    role: str | None = Field(None, min_length=1, max_length=100)
    status: MemberStatus | None = None
    phone: str | None = None
    avatar_url: str | None = None


class TeamMemberOut(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    role: str
    status: str | None = None
    phone: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
