"""Core exception hierarchy.

Input validation errors are raised before any core logic runs and are never
audited. StorageError is the only true fault: it wraps failures of the
append-only stores and is surfaced to callers.
"""


class DuetError(Exception):
    """Base exception for all duet core errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownAgentError(DuetError):
    """Raised when an agent identifier does not match a configured agent."""

    def __init__(self, agent: str) -> None:
        super().__init__(f"Unknown agent: {agent!r}")
        self.agent = agent


class EmptyInputError(DuetError):
    """Raised when required text is missing or blank."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing {field}")
        self.field = field


class StorageError(DuetError):
    """Raised when an append-only store cannot be read or written."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Storage failure for {key!r}: {reason}")
        self.key = key
        self.reason = reason
