"""Client: a customer company owned by one user."""

from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, owner_column, updated_column


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = owner_column()
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    manager: Mapped[str | None] = mapped_column(String(255))
    industry: Mapped[str | None] = mapped_column(String(100))
    classification: Mapped[str | None] = mapped_column(String(50))  # Customer, Prospect, Partner
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
