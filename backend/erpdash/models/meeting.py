"""Meeting: a scheduled appointment with participants."""

from datetime import date, datetime

from sqlalchemy import JSON, Date, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, owner_column, updated_column


class Meeting(Base):
    __tablename__ = "meetings"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = owner_column()
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    meeting_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    starts_at: Mapped[datetime | None] = mapped_column(DateTime)
    location: Mapped[str | None] = mapped_column(String(255))
    participants: Mapped[list | None] = mapped_column(JSON, default=list)
    status: Mapped[str | None] = mapped_column(String(20), default="scheduled")  # scheduled | completed | canceled
    notes: Mapped[str | None] = mapped_column(Text)
    project_id: Mapped[str | None] = mapped_column(String(36))
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
