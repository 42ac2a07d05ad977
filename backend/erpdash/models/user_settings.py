"""UserSettings: one row of currency and tax preferences per user."""

from datetime import datetime

from sqlalchemy import Boolean, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from erpdash.database import Base
from erpdash.models._columns import created_column, id_column, updated_column


class UserSettings(Base):
    __tablename__ = "user_settings"

    id: Mapped[str] = id_column()
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    currency_symbol: Mapped[str] = mapped_column(String(5), default="$")
    currency_code: Mapped[str] = mapped_column(String(3), default="USD")
    tax_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    tax_rate: Mapped[float] = mapped_column(Float, default=19)
    tax_name: Mapped[str] = mapped_column(String(20), default="VAT")
    created_at: Mapped[datetime] = created_column()
    updated_at: Mapped[datetime] = updated_column()
