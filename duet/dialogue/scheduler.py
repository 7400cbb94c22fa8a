"""DialogueScheduler: drives the unattended two-agent conversation.

The scheduler:
1. Produces one turn as soon as it starts
2. Produces a further turn every ``tick_interval_seconds``
3. Alternates speakers and drifts between topics
4. Goes idle after ``max_turns`` turns or on stop()
"""

import asyncio
import contextlib
import random

from duet.audit import AuditEventKind, AuditLog
from duet.config.models import AgentProfile, DialogueConfig
from duet.dialogue.broadcast import Broadcaster, Subscription
from duet.dialogue.models import DialogueStatus, DialogueTurn, SchedulerState
from duet.dialogue.templates import Interlocutor, TemplateBands, compose_utterance
from duet.exceptions import DuetError
from duet.knowledge import KnowledgeBase
from duet.learning import LearningPipeline
from duet.observability.logging import get_logger
from duet.observability.metrics import (
    DIALOGUE_RUNNING,
    DIALOGUE_TICK_FAILURES,
    DIALOGUE_TURNS,
)

logger = get_logger(__name__)


class DialogueScheduler:
    """Timed, turn-taking dialogue between the first two configured agents.

    Ticks are serialized by a lock, so a slow tick delays the next one
    rather than overlapping it. A failing tick is logged and the schedule
    carries on; its state changes are only committed once the turn has
    been audited.
    """

    def __init__(
        self,
        knowledge: KnowledgeBase,
        audit: AuditLog,
        broadcaster: Broadcaster,
        config: DialogueConfig,
        learning: LearningPipeline | None = None,
        rng: random.Random | None = None,
    ) -> None:
        agents = knowledge.agents
        if len(agents) < 2:
            raise ValueError("Dialogue needs two agents")

        self._knowledge = knowledge
        self._audit = audit
        self._broadcaster = broadcaster
        self._config = config
        self._learning = learning
        self._rng = rng or random.Random()
        self._agents: tuple[AgentProfile, AgentProfile] = (agents[0], agents[1])
        self._bands = TemplateBands(
            question=config.question_probability,
            statement=config.statement_probability,
        )

        self._state = SchedulerState.IDLE
        self._turn_count = 0
        self._last_speaker: str | None = None
        self._topic: str | None = None
        self._switch_period = config.topic_switch_max
        self._tick_lock = asyncio.Lock()
        self._tick_task: asyncio.Task[None] | None = None
        self._run = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    @property
    def turn_count(self) -> int:
        return self._turn_count

    @property
    def topic(self) -> str | None:
        return self._topic

    def status(self) -> DialogueStatus:
        """Snapshot of the current state."""
        return DialogueStatus(
            state=self._state,
            turn_count=self._turn_count,
            max_turns=self._config.max_turns,
            topic=self._topic,
            last_speaker=self._last_speaker,
            subscribers=self._broadcaster.subscriber_count,
        )

    def subscribe(self) -> Subscription:
        """Register a listener for broadcast turns."""
        return self._broadcaster.subscribe()

    def close_listeners(self) -> None:
        """End every listener subscription."""
        self._broadcaster.close_all()

    async def start(self) -> bool:
        """Begin a new run. Returns False if one is already running."""
        if self.is_running:
            logger.warning("dialogue_already_running", turn_count=self._turn_count)
            return False

        self._state = SchedulerState.RUNNING
        self._run += 1
        self._turn_count = 0
        self._last_speaker = None
        self._topic = self._rng.choice(self._config.topics)
        self._switch_period = self._roll_switch_period()
        DIALOGUE_RUNNING.set(1)

        logger.info(
            "dialogue_started",
            topic=self._topic,
            max_turns=self._config.max_turns,
            tick_interval_seconds=self._config.tick_interval_seconds,
        )

        await self._safe_step()
        if self.is_running:
            self._tick_task = asyncio.create_task(self._tick_loop(self._run))
        return True

    async def stop(self) -> bool:
        """End the current run. Returns False if nothing was running."""
        async with self._tick_lock:
            was_running = self.is_running
            self._enter_idle()
            task, self._tick_task = self._tick_task, None

        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        if was_running:
            logger.info("dialogue_stopped", turn_count=self._turn_count, reason="requested")
        return was_running

    async def step_once(self) -> DialogueTurn | None:
        """Run one tick.

        Returns the broadcast turn, or None when idle or when the turn bound
        was reached (which ends the run).

        Raises:
            StorageError: If the turn could not be audited
        """
        async with self._tick_lock:
            if not self.is_running:
                return None

            if self._turn_count >= self._config.max_turns:
                self._enter_idle()
                self._cancel_ticks()
                logger.info("dialogue_stopped", turn_count=self._turn_count, reason="max_turns")
                return None

            topic, period, switched = self._next_topic()
            speaker, partner = self._next_speakers()
            text = compose_utterance(
                await self._interlocutor(speaker),
                await self._interlocutor(partner),
                topic,
                self._rng,
                self._bands,
            )
            turn = DialogueTurn(
                turn=self._turn_count + 1,
                agent=speaker.id,
                speaker=speaker.display_name,
                topic=topic,
                text=text,
            )

            await self._audit.record(speaker.id, AuditEventKind.SCHEDULED_SAY, text)

            if switched:
                logger.info("dialogue_topic_switched", topic=topic, period=period)
            self._topic = topic
            self._switch_period = period
            self._last_speaker = speaker.id
            self._turn_count += 1
            DIALOGUE_TURNS.labels(agent=speaker.id).inc()

            delivered = self._broadcaster.publish(turn)
            logger.debug(
                "dialogue_turn",
                turn=turn.turn,
                agent=speaker.id,
                topic=topic,
                text=text,
                delivered=delivered,
            )

            if self._learning is not None and self._config.learn_from_dialogue:
                try:
                    await self._learning.learn(speaker.id, text)
                except DuetError as e:
                    logger.warning("dialogue_learn_failed", agent=speaker.id, error=e.message)

            return turn

    async def _tick_loop(self, run: int) -> None:
        while self.is_running and run == self._run:
            await asyncio.sleep(self._config.tick_interval_seconds)
            if not self.is_running or run != self._run:
                break
            await self._safe_step()

    async def _safe_step(self) -> None:
        try:
            await self.step_once()
        except Exception as e:
            DIALOGUE_TICK_FAILURES.inc()
            logger.error(
                "dialogue_tick_failed",
                turn_count=self._turn_count,
                error=str(e),
                error_type=type(e).__name__,
            )

    def _enter_idle(self) -> None:
        self._state = SchedulerState.IDLE
        DIALOGUE_RUNNING.set(0)

    def _cancel_ticks(self) -> None:
        # The tick loop exits by itself once idle; only a foreign caller cancels it
        task, self._tick_task = self._tick_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    def _roll_switch_period(self) -> int:
        return self._rng.randint(self._config.topic_switch_min, self._config.topic_switch_max)

    def _next_topic(self) -> tuple[str, int, bool]:
        """Topic and switch period for the coming turn, without committing them."""
        topic = self._topic or self._rng.choice(self._config.topics)
        if self._turn_count == 0 or self._turn_count % self._switch_period != 0:
            return topic, self._switch_period, False

        choices = [t for t in self._config.topics if t != topic] or list(self._config.topics)
        return self._rng.choice(choices), self._roll_switch_period(), True

    def _next_speakers(self) -> tuple[AgentProfile, AgentProfile]:
        first, second = self._agents
        if self._last_speaker == first.id:
            return second, first
        return first, second

    async def _interlocutor(self, agent: AgentProfile) -> Interlocutor:
        pool = await self._knowledge.brain_pool(agent.id)
        count = min(self._config.facts_per_turn, len(pool))
        facts = tuple(self._rng.sample(pool, count)) if count else ()
        return Interlocutor(name=agent.display_name, facts=facts)
