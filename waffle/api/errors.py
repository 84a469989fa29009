from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ApiErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PUZZLE_NOT_FOUND = "PUZZLE_NOT_FOUND"
    SESSION_FINISHED = "SESSION_FINISHED"
    SAME_CELL_SWAP = "SAME_CELL_SWAP"
    GAP_CELL_SWAP = "GAP_CELL_SWAP"
    LOCKED_CELL_SWAP = "LOCKED_CELL_SWAP"
    STATE_CORRUPT = "STATE_CORRUPT"


class ApiErrorDetail(BaseModel):
    code: str
    message: str
    details: Any | None = Field(default=None)


class ApiError(BaseModel):
    error: ApiErrorDetail


DEFAULT_MESSAGES: dict[str, str] = {
    ApiErrorCode.VALIDATION_ERROR.value: "Invalid request",
    ApiErrorCode.HTTP_ERROR.value: "Request failed",
    ApiErrorCode.INTERNAL_ERROR.value: "Internal server error",
    ApiErrorCode.PUZZLE_NOT_FOUND.value: "Puzzle not found",
    ApiErrorCode.SESSION_FINISHED.value: "Session is already finished",
    ApiErrorCode.SAME_CELL_SWAP.value: "A tile cannot be swapped with itself",
    ApiErrorCode.GAP_CELL_SWAP.value: "Only letter tiles can be swapped",
    ApiErrorCode.LOCKED_CELL_SWAP.value: "Tiles in their correct position cannot be moved",
    ApiErrorCode.STATE_CORRUPT.value: "Submitted board does not belong to this puzzle",
}


class ApiException(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        code: ApiErrorCode | str,
        message: str | None = None,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code.value if isinstance(code, ApiErrorCode) else code
        self.message = message or DEFAULT_MESSAGES.get(self.code, "Request failed")
        self.details = details
        super().__init__(self.message)


class NotFoundError(ApiException):
    def __init__(self, code: ApiErrorCode | str, message: str | None = None, details: Any | None = None) -> None:
        super().__init__(status_code=404, code=code, message=message, details=details)


class RuleViolationError(ApiException):
    def __init__(self, code: ApiErrorCode | str, message: str | None = None, details: Any | None = None) -> None:
        super().__init__(status_code=409, code=code, message=message, details=details)


def make_error_payload(code: ApiErrorCode | str, message: str, details: Any | None = None) -> dict[str, Any]:
    code_value = code.value if isinstance(code, ApiErrorCode) else code
    return ApiError(
        error=ApiErrorDetail(
            code=code_value,
            message=message,
            details=details,
        )
    ).model_dump(exclude_none=True)


__all__ = [
    "ApiError",
    "ApiErrorCode",
    "ApiException",
    "NotFoundError",
    "RuleViolationError",
    "make_error_payload",
]
