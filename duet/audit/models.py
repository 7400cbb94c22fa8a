"""Audit record models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class AuditEventKind(str, Enum):
    """What an audit record describes."""

    BRAIN_DRAW = "brain-draw"
    QA_HIT = "qa-hit"
    QA_MISS = "qa-miss"
    LEARN = "learn"
    LEARN_FAILED = "learn-failed"
    SKIP_EMPTY = "skip-empty"
    SKIP_QA = "skip-qa"
    SKIP_GARBAGE = "skip-garbage"
    SKIP_DUPLICATE = "skip-duplicate"
    SCHEDULED_SAY = "scheduled-say"


class AuditRecord(BaseModel):
    """Immutable record of one interaction.

    Records are serialized one per line and never rewritten.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now, description="Write time")
    agent: str = Field(..., description="Agent id, or 'both'")
    kind: AuditEventKind = Field(..., description="Event kind")
    payload: str = Field(default="", description="Text involved in the event")
    reason: str | None = Field(default=None, description="Why a learning attempt was skipped")
