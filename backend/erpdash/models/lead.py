"""Lead: a sales prospect that may later be converted into a client."""

from datetime import datetime

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, owner_column, updated_column


class Lead(Base):
    __tablename__ = "leads"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = owner_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50))
    source: Mapped[str] = mapped_column(String(100), nullable=False)
    estimated_budget: Mapped[float] = mapped_column(Float, default=0)
    percentage: Mapped[int] = mapped_column(Integer, default=10)  # win probability
    notes: Mapped[str | None] = mapped_column(Text)
    positive_qualities: Mapped[str | None] = mapped_column(Text)
    negative_qualities: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
