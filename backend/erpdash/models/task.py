"""Task: a unit of work, optionally attached to a project."""

from datetime import date, datetime

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, owner_column, updated_column


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = owner_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    project_id: Mapped[str | None] = mapped_column(String(36))
    duration: Mapped[int | None] = mapped_column(Integer)  # hours
    status: Mapped[str | None] = mapped_column(String(50))  # todo | in_progress | completed
    assigned_to: Mapped[str | None] = mapped_column(String(255))
    priority: Mapped[str | None] = mapped_column(String(20))
    due_date: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
