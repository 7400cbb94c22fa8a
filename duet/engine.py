"""DuetEngine: the request surface over knowledge, learning and dialogue.

Validation happens here, before any core component is reached; rejected
input is never audited. Everything that is attempted is audited.
"""

import random

from duet.audit import AuditEventKind, AuditLog
from duet.config.settings import Settings
from duet.dialogue import Broadcaster, DialogueScheduler, DialogueStatus, Subscription
from duet.exceptions import EmptyInputError
from duet.knowledge import (
    AskBothResult,
    AskResult,
    KnowledgeBase,
    NonRepeatingSampler,
    find_match,
)
from duet.learning import LearningPipeline, LearnResult
from duet.observability.logging import get_logger
from duet.observability.metrics import BRAIN_DRAWS, QA_LOOKUPS
from duet.storage import LogStore, create_log_store

logger = get_logger(__name__)

BOTH = "both"


def require_text(value: str | None, field: str) -> str:
    """Return ``value`` stripped, or raise EmptyInputError when blank."""
    if value is None or not value.strip():
        raise EmptyInputError(field)
    return value.strip()


class DuetEngine:
    """Wires the core components together and exposes the operations."""

    def __init__(
        self,
        knowledge: KnowledgeBase,
        audit: AuditLog,
        sampler: NonRepeatingSampler,
        learning: LearningPipeline,
        scheduler: DialogueScheduler,
    ) -> None:
        self.knowledge = knowledge
        self.audit = audit
        self.sampler = sampler
        self.learning = learning
        self.scheduler = scheduler

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        log_store: LogStore | None = None,
        rng: random.Random | None = None,
    ) -> "DuetEngine":
        """Build an engine from configuration.

        Args:
            settings: Loaded settings
            log_store: Storage override, e.g. an InMemoryLogStore in tests
            rng: Shared random source for sampling and dialogue
        """
        rng = rng or random.Random()
        store = log_store or create_log_store(settings.storage)
        knowledge = KnowledgeBase(store, settings.agents, settings.knowledge)
        audit = AuditLog(
            store.open(settings.storage.interactions_key),
            store.open(settings.storage.learning_key),
        )
        sampler = NonRepeatingSampler(
            cooldown_size=settings.knowledge.cooldown_size,
            filler_line=settings.knowledge.filler_line,
            rng=rng,
        )
        learning = LearningPipeline(knowledge, audit)
        scheduler = DialogueScheduler(
            knowledge,
            audit,
            Broadcaster(settings.dialogue.subscriber_queue_size),
            settings.dialogue,
            learning=learning,
            rng=rng,
        )
        logger.info(
            "engine_created",
            agents=[agent.id for agent in settings.agents],
            storage=settings.storage.backend,
        )
        return cls(knowledge, audit, sampler, learning, scheduler)

    async def lookup_brain_line(self, agent: str) -> str:
        """Draw a line from the agent's brain, avoiding its recent picks.

        Raises:
            UnknownAgentError: If the agent is not configured
            StorageError: If the brain or audit stream cannot be accessed
        """
        profile = self.knowledge.resolve(agent)
        pool = await self.knowledge.brain_pool(profile.id)
        line = self.sampler.pick(profile.id, pool)

        await self.audit.record(profile.id, AuditEventKind.BRAIN_DRAW, line)
        if pool:
            self.sampler.remember(profile.id, line)
        BRAIN_DRAWS.labels(agent=profile.id, source="brain" if pool else "filler").inc()
        return line

    async def ask(self, agent: str, question: str | None) -> AskResult:
        """Look up an answer to ``question`` in the shared QA store.

        Raises:
            UnknownAgentError: If the agent is not configured
            EmptyInputError: If the question is blank
            StorageError: If the QA store or audit stream cannot be accessed
        """
        profile = self.knowledge.resolve(agent)
        question = require_text(question, "input")

        match = find_match(question, await self.knowledge.qa_pairs())
        if match is None:
            QA_LOOKUPS.labels(agent=profile.id, result="miss").inc()
            await self.audit.record(profile.id, AuditEventKind.QA_MISS, question)
            logger.info("qa_miss", agent=profile.id, question=question)
            return AskResult(
                agent=profile.id,
                question=question,
                matched=False,
                answer=self.knowledge.config.unknown_answer,
            )

        pair, match_pass = match
        QA_LOOKUPS.labels(agent=profile.id, result="hit").inc()
        await self.audit.record(
            profile.id, AuditEventKind.QA_HIT, f"Q: {question} → A: {pair.answer}"
        )
        logger.info("qa_hit", agent=profile.id, match_pass=match_pass)
        return AskResult(
            agent=profile.id,
            question=question,
            matched=True,
            answer=pair.answer,
            match_pass=match_pass,
        )

    async def ask_both(self, question: str | None) -> AskBothResult:
        """Ask every agent at once.

        A matched answer is split on the configured separator, one part per
        agent in configuration order; absent parts become a placeholder.

        Raises:
            EmptyInputError: If the question is blank
            StorageError: If the QA store or audit stream cannot be accessed
        """
        question = require_text(question, "input")
        config = self.knowledge.config
        agents = self.knowledge.agents

        match = find_match(question, await self.knowledge.qa_pairs())
        if match is None:
            fillers = [config.unknown_answer, config.unknown_answer_alt]
            responses = {
                agent.id: fillers[min(i, len(fillers) - 1)] for i, agent in enumerate(agents)
            }
            QA_LOOKUPS.labels(agent=BOTH, result="miss").inc()
            await self.audit.record(BOTH, AuditEventKind.QA_MISS, question)
            return AskBothResult(question=question, matched=False, responses=responses)

        pair, _ = match
        parts = [part.strip() for part in pair.answer.split(config.both_separator)]
        responses = {
            agent.id: (parts[i] if i < len(parts) and parts[i] else config.missing_part)
            for i, agent in enumerate(agents)
        }
        summary = " | ".join(
            f"{agent.display_name}: {responses[agent.id]}" for agent in agents
        )
        QA_LOOKUPS.labels(agent=BOTH, result="hit").inc()
        await self.audit.record(BOTH, AuditEventKind.QA_HIT, f"Q: {question} → {summary}")
        return AskBothResult(question=question, matched=True, responses=responses)

    async def learn(self, agent: str, phrase: str | None) -> LearnResult:
        """Offer ``phrase`` to the agent's brain.

        Blank phrases are not rejected here: they reach the pipeline so the
        attempt is audited as skipped-empty.

        Raises:
            UnknownAgentError: If the agent is not configured
            StorageError: If the learning stream cannot be written
        """
        profile = self.knowledge.resolve(agent)
        return await self.learning.learn(profile.id, phrase or "")

    async def start_dialogue(self) -> DialogueStatus:
        """Start the scheduled dialogue; a no-op when already running."""
        await self.scheduler.start()
        return self.scheduler.status()

    async def stop_dialogue(self) -> DialogueStatus:
        """Stop the scheduled dialogue; a no-op when idle."""
        await self.scheduler.stop()
        return self.scheduler.status()

    def subscribe(self) -> Subscription:
        """Register a listener for dialogue turns."""
        return self.scheduler.subscribe()

    async def shutdown(self) -> None:
        """Stop the dialogue and end every listener stream."""
        await self.scheduler.stop()
        self.scheduler.close_listeners()
