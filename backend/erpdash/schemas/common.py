"""Operation outcomes shared by repositories and the trash ledger.

Repository and ledger methods never raise past their own boundary; they
return an `Outcome` the caller inspects (and the HTTP layer converts into
an error response when `ok` is False).
"""

import enum
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorCode(str, enum.Enum):
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    STORE_FAILURE = "STORE_FAILURE"
    VALIDATION_FAILURE = "VALIDATION_FAILURE"


class Outcome(BaseModel, Generic[T]):
    ok: bool
    value: T | None = None
    error: ErrorCode | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: T | None = None, message: str | None = None) -> "Outcome[T]":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failure(
        cls,
        error: ErrorCode,
        message: str,
        value: T | None = None,
    ) -> "Outcome[T]":
        return cls(ok=False, value=value, error=error, message=message)
