"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing or blank text)."""

    AGENT_NOT_FOUND = "AGENT_NOT_FOUND"
    """The speaker does not name a configured agent."""

    STORAGE_ERROR = "STORAGE_ERROR"
    """An append-only store could not be read or written."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Example:
        {
            "error": {
                "code": "AGENT_NOT_FOUND",
                "message": "Unknown agent: 'nova'"
            }
        }
    """

    error: ErrorBody
