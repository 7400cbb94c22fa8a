"""Learning outcome models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from duet.audit.models import AuditEventKind


class LearnOutcome(str, Enum):
    """Result of one learning attempt."""

    LEARNED = "learned"
    SKIPPED_EMPTY = "skipped-empty"
    SKIPPED_QA_FORMAT = "skipped-qa-format"
    SKIPPED_GARBAGE = "skipped-garbage"
    SKIPPED_DUPLICATE = "skipped-duplicate"
    FAILED = "failed"

    @property
    def audit_kind(self) -> AuditEventKind:
        return _AUDIT_KINDS[self]

    @property
    def accepted(self) -> bool:
        """True when the caller's request counts as accepted."""
        return self in (
            LearnOutcome.LEARNED,
            LearnOutcome.SKIPPED_GARBAGE,
            LearnOutcome.SKIPPED_DUPLICATE,
        )


_AUDIT_KINDS: dict[LearnOutcome, AuditEventKind] = {
    LearnOutcome.LEARNED: AuditEventKind.LEARN,
    LearnOutcome.SKIPPED_EMPTY: AuditEventKind.SKIP_EMPTY,
    LearnOutcome.SKIPPED_QA_FORMAT: AuditEventKind.SKIP_QA,
    LearnOutcome.SKIPPED_GARBAGE: AuditEventKind.SKIP_GARBAGE,
    LearnOutcome.SKIPPED_DUPLICATE: AuditEventKind.SKIP_DUPLICATE,
    LearnOutcome.FAILED: AuditEventKind.LEARN_FAILED,
}


class LearnResult(BaseModel):
    """What happened to a phrase submitted for learning."""

    model_config = ConfigDict(frozen=True)

    agent: str = Field(..., description="Agent id")
    outcome: LearnOutcome = Field(..., description="Attempt outcome")
    text: str = Field(..., description="Phrase after run-on collapse")
    reason: str = Field(..., description="Human-readable explanation")
