"""Learning: sanitization and the append pipeline for brain lines."""

from duet.learning.models import LearnOutcome, LearnResult
from duet.learning.pipeline import LearningPipeline
from duet.learning.sanitizer import (
    Verdict,
    classify,
    collapse_run_on_duplicate,
    garbage_reason,
)

__all__ = [
    "LearnOutcome",
    "LearnResult",
    "LearningPipeline",
    "Verdict",
    "classify",
    "collapse_run_on_duplicate",
    "garbage_reason",
]
