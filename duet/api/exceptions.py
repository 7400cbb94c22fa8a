"""API exception hierarchy for consistent error handling.

All API exceptions inherit from DuetAPIError, which carries the
status_code and error_code used by the global exception handler. Core
exceptions are translated with from_core_error().
"""

from duet.api.models.errors import ErrorCode
from duet.exceptions import DuetError, EmptyInputError, StorageError, UnknownAgentError


class DuetAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(DuetAPIError):
    """Raised when request validation fails."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class AgentNotFoundError(DuetAPIError):
    """Raised when the speaker is not a configured agent."""

    status_code = 400
    error_code = ErrorCode.AGENT_NOT_FOUND


class StorageFailureError(DuetAPIError):
    """Raised when an append-only store fails."""

    status_code = 500
    error_code = ErrorCode.STORAGE_ERROR


def from_core_error(exc: DuetError) -> DuetAPIError:
    """Translate a core exception into its API counterpart."""
    if isinstance(exc, UnknownAgentError):
        return AgentNotFoundError(exc.message)
    if isinstance(exc, EmptyInputError):
        return InvalidRequestError(exc.message)
    if isinstance(exc, StorageError):
        return StorageFailureError(exc.message)
    return DuetAPIError(exc.message)
