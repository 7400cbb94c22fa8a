"""LearningPipeline: decides what enters an agent's brain."""

from duet.audit import AuditEventKind, AuditLog
from duet.exceptions import StorageError
from duet.knowledge import KnowledgeBase
from duet.learning.models import LearnOutcome, LearnResult
from duet.learning.sanitizer import collapse_run_on_duplicate, garbage_reason
from duet.observability.logging import get_logger
from duet.observability.metrics import LEARN_OUTCOMES
from duet.storage import flatten_line

logger = get_logger(__name__)


class LearningPipeline:
    """Sanitize, deduplicate and append freeform phrases.

    Every attempt leaves exactly one record on the learning stream,
    including rejected ones; that stream is the only trace of them. A
    successful learn is also recorded on the interaction stream.
    """

    def __init__(self, knowledge: KnowledgeBase, audit: AuditLog) -> None:
        self._knowledge = knowledge
        self._audit = audit

    async def learn(self, agent: str, raw_phrase: str) -> LearnResult:
        """Try to add ``raw_phrase`` to the agent's brain.

        Raises:
            UnknownAgentError: If the agent is not configured
            StorageError: If the learning stream itself cannot be written
        """
        profile = self._knowledge.resolve(agent)
        config = self._knowledge.config
        text = collapse_run_on_duplicate(flatten_line(raw_phrase))

        if not text:
            return await self._finish(profile.id, LearnOutcome.SKIPPED_EMPTY, text, "empty phrase")

        if config.qa_delimiter in text:
            return await self._finish(
                profile.id,
                LearnOutcome.SKIPPED_QA_FORMAT,
                text,
                f"contains QA delimiter {config.qa_delimiter!r}",
            )

        reason = garbage_reason(text, config.min_line_length)
        if reason is not None:
            return await self._finish(profile.id, LearnOutcome.SKIPPED_GARBAGE, text, reason)

        async with self._knowledge.write_lock(profile.id):
            try:
                if await self._knowledge.contains_line(profile.id, text):
                    outcome, reason = LearnOutcome.SKIPPED_DUPLICATE, "already known"
                else:
                    await self._knowledge.append_brain_line(profile.id, text)
                    outcome, reason = LearnOutcome.LEARNED, "appended"
            except StorageError as e:
                outcome, reason = LearnOutcome.FAILED, e.message

        result = await self._finish(profile.id, outcome, text, reason)
        if outcome is LearnOutcome.LEARNED:
            await self._audit.record(profile.id, AuditEventKind.LEARN, text)
        return result

    async def _finish(
        self,
        agent: str,
        outcome: LearnOutcome,
        text: str,
        reason: str,
    ) -> LearnResult:
        LEARN_OUTCOMES.labels(agent=agent, outcome=outcome.value).inc()
        await self._audit.record_learning(agent, outcome.audit_kind, text, reason)

        if outcome is LearnOutcome.LEARNED:
            logger.info("phrase_learned", agent=agent, text=text)
        elif outcome is LearnOutcome.FAILED:
            logger.error("phrase_learn_failed", agent=agent, reason=reason)
        else:
            logger.info("phrase_skipped", agent=agent, outcome=outcome.value, reason=reason)

        return LearnResult(agent=agent, outcome=outcome, text=text, reason=reason)
