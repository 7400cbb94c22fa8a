"""Dialogue domain models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class SchedulerState(str, Enum):
    """Dialogue scheduler lifecycle. Stopping returns to IDLE."""

    IDLE = "idle"
    RUNNING = "running"


class DialogueTurn(BaseModel):
    """One generated line of a scheduled dialogue, as broadcast to listeners."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now, description="Generation time")
    turn: int = Field(..., ge=1, description="1-based turn number within the run")
    agent: str = Field(..., description="Speaking agent id")
    speaker: str = Field(..., description="Speaking agent display name")
    topic: str = Field(..., description="Topic in effect for this turn")
    text: str = Field(..., description="Generated utterance")


class DialogueStatus(BaseModel):
    """Snapshot of the scheduler state."""

    state: SchedulerState
    turn_count: int
    max_turns: int
    topic: str | None = None
    last_speaker: str | None = None
    subscribers: int = 0
