from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class DataStatus(str, Enum):
    LIVE = "live"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


class ActionResult(BaseModel):
    """관심종목 변경 결과. 성공 시 message, 실패 시 error만 채워진다."""

    success: bool
    message: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, message: str) -> ActionResult:
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, error: str) -> ActionResult:
        return cls(success=False, error=error)
