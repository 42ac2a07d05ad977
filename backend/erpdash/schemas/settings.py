"""Pydantic schemas for per-user currency and tax settings."""

from pydantic import BaseModel, Field


class UserSettingsOut(BaseModel):
    id: str | None = None
    currency_symbol: str = "$"
    currency_code: str = "USD"
    tax_enabled: bool = False
    tax_rate: float = 19
    tax_name: str = "VAT"

    model_config = {"from_attributes": True}


class UserSettingsUpdate(BaseModel):
    currency_symbol: str | None = Field(None, min_length=1, max_length=5)
    currency_code: str | None = Field(None, min_length=3, max_length=3)
    tax_enabled: bool | None = None
    tax_rate: float | None = Field(None, ge=0, le=100)
    tax_name: str | None = Field(None, min_length=1, max_length=20)
