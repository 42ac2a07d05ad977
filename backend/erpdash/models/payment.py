"""Payment: money received against an invoice or project."""

from datetime import date, datetime

from sqlalchemy import Date, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, owner_column, updated_column


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = owner_column()
    invoice_id: Mapped[str | None] = mapped_column(String(36))
    project_id: Mapped[str | None] = mapped_column(String(36))
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    method: Mapped[str] = mapped_column(String(50), nullable=False)  # bank_transfer, card, cash, ...
    reference: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
