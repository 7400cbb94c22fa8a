"""Tests for DuetEngine operations."""

import pytest

from duet.audit import AuditEventKind
from duet.config.settings import Settings
from duet.dialogue import SchedulerState
from duet.engine import BOTH, DuetEngine, require_text
from duet.exceptions import EmptyInputError, StorageError, UnknownAgentError
from duet.learning import LearnOutcome
from duet.storage import InMemoryLogStore
from duet.storage.stores.inmemory import InMemoryAppendLog


class FlakyInteractionLog(InMemoryAppendLog):
    def __init__(self, key: str, store: "FlakyInteractionStore") -> None:
        super().__init__(key)
        self._store = store

    async def append(self, text: str) -> None:
        if self._store.failures:
            self._store.failures -= 1
            raise StorageError(self.key, "disk full")
        await super().append(text)


class FlakyInteractionStore(InMemoryLogStore):
    """Store whose interaction stream fails the next ``failures`` appends."""

    def __init__(self) -> None:
        super().__init__()
        self.failures = 0
        self._interactions: FlakyInteractionLog | None = None

    def open(self, key: str) -> InMemoryAppendLog:
        if key != "logs/interactions.log":
            return super().open(key)
        if self._interactions is None:
            self._interactions = FlakyInteractionLog(key, self)
        return self._interactions


class TestRequireText:
    """Tests for require_text."""

    def test_strips(self) -> None:
        assert require_text("  hi  ", "input") == "hi"

    @pytest.mark.parametrize("value", [None, "", "   \t"])
    def test_rejects_blank(self, value: str | None) -> None:
        with pytest.raises(EmptyInputError) as exc_info:
            require_text(value, "input")
        assert exc_info.value.message == "Missing input"


class TestAsk:
    """Tests for DuetEngine.ask."""

    @pytest.mark.asyncio
    async def test_exact_hit(self, engine: DuetEngine) -> None:
        result = await engine.ask("veya", "Hello!")

        assert result.matched is True
        assert result.answer == "Hi there!"
        assert result.match_pass == "exact"

    @pytest.mark.asyncio
    async def test_prefix_and_contains(self, engine: DuetEngine) -> None:
        prefix = await engine.ask("veya", "hello there, anyone home")
        contains = await engine.ask("orion", "so... what is your name?")

        assert prefix.match_pass == "prefix"
        assert prefix.answer == "Hi there!"
        assert contains.match_pass == "contains"
        assert contains.answer == "I'm one of a pair."

    @pytest.mark.asyncio
    async def test_agent_is_case_insensitive(self, engine: DuetEngine) -> None:
        result = await engine.ask("ORION", "hello")
        assert result.agent == "orion"

    @pytest.mark.asyncio
    async def test_miss_returns_unknown_answer(self, engine: DuetEngine) -> None:
        result = await engine.ask("veya", "how far is the moon")

        assert result.matched is False
        assert result.answer == engine.knowledge.config.unknown_answer
        assert result.match_pass is None

    @pytest.mark.asyncio
    async def test_hit_and_miss_are_audited(self, engine: DuetEngine) -> None:
        await engine.ask("veya", "hello")
        await engine.ask("orion", "how far is the moon")

        hit, miss = await engine.audit.interactions()
        assert hit.kind is AuditEventKind.QA_HIT
        assert hit.agent == "veya"
        assert hit.payload == "Q: hello → A: Hi there!"
        assert miss.kind is AuditEventKind.QA_MISS
        assert miss.agent == "orion"
        assert miss.payload == "how far is the moon"

    @pytest.mark.asyncio
    async def test_blank_question_rejected_without_audit(self, engine: DuetEngine) -> None:
        with pytest.raises(EmptyInputError):
            await engine.ask("veya", "   ")
        assert await engine.audit.interactions() == []

    @pytest.mark.asyncio
    async def test_unknown_agent(self, engine: DuetEngine) -> None:
        with pytest.raises(UnknownAgentError) as exc_info:
            await engine.ask("nova", "hello")
        assert exc_info.value.agent == "nova"


class TestAskBoth:
    """Tests for DuetEngine.ask_both."""

    @pytest.mark.asyncio
    async def test_answer_split_per_agent(self, engine: DuetEngine) -> None:
        result = await engine.ask_both("favorite color")

        assert result.matched is True
        assert result.responses == {"veya": "Blue", "orion": "Green"}

    @pytest.mark.asyncio
    async def test_missing_part_filled(self, engine: DuetEngine) -> None:
        result = await engine.ask_both("what is your name")

        assert result.responses["veya"] == "I'm one of a pair."
        assert result.responses["orion"] == engine.knowledge.config.missing_part

    @pytest.mark.asyncio
    async def test_miss_uses_distinct_fillers(self, engine: DuetEngine) -> None:
        config = engine.knowledge.config
        result = await engine.ask_both("what is gravity")

        assert result.matched is False
        assert result.responses == {
            "veya": config.unknown_answer,
            "orion": config.unknown_answer_alt,
        }

    @pytest.mark.asyncio
    async def test_audited_under_both(self, engine: DuetEngine) -> None:
        await engine.ask_both("favorite color")

        (record,) = await engine.audit.interactions()
        assert record.agent == BOTH
        assert record.payload == "Q: favorite color → Veya: Blue | Orion: Green"


class TestLookupBrainLine:
    """Tests for DuetEngine.lookup_brain_line."""

    @pytest.mark.asyncio
    async def test_draws_from_own_brain(self, engine: DuetEngine) -> None:
        veya_lines = await engine.knowledge.brain_lines("veya")
        for _ in range(10):
            assert await engine.lookup_brain_line("veya") in veya_lines

    @pytest.mark.asyncio
    async def test_never_returns_qa_lines(
        self, engine: DuetEngine, log_store: InMemoryLogStore
    ) -> None:
        await log_store.open("assets/orion_brain.txt").append("sky = blue")
        for _ in range(20):
            line = await engine.lookup_brain_line("orion")
            assert "=" not in line

    @pytest.mark.asyncio
    async def test_cooldown_avoids_immediate_repeat(self, engine: DuetEngine) -> None:
        first = await engine.lookup_brain_line("veya")
        second = await engine.lookup_brain_line("veya")
        assert first != second

    @pytest.mark.asyncio
    async def test_empty_brain_yields_filler(
        self, settings: Settings
    ) -> None:
        engine = DuetEngine.from_settings(settings, log_store=InMemoryLogStore())
        line = await engine.lookup_brain_line("veya")
        assert line == settings.knowledge.filler_line

    @pytest.mark.asyncio
    async def test_draw_is_audited(self, engine: DuetEngine) -> None:
        line = await engine.lookup_brain_line("Veya")

        (record,) = await engine.audit.interactions()
        assert record.kind is AuditEventKind.BRAIN_DRAW
        assert record.agent == "veya"
        assert record.payload == line

    @pytest.mark.asyncio
    async def test_failed_audit_leaves_cooldown_untouched(self, settings: Settings) -> None:
        store = FlakyInteractionStore()
        engine = DuetEngine.from_settings(settings, log_store=store)
        await store.open("assets/veya_brain.txt").append("Comets carry old water.")

        store.failures = 1
        with pytest.raises(StorageError):
            await engine.lookup_brain_line("veya")
        assert engine.sampler.history("veya") == []

        line = await engine.lookup_brain_line("veya")
        assert engine.sampler.history("veya") == [line]


class TestLearn:
    """Tests for DuetEngine.learn."""

    @pytest.mark.asyncio
    async def test_learned_line_becomes_drawable(self, engine: DuetEngine) -> None:
        result = await engine.learn("orion", "Compasses point at stubborn things.")

        assert result.outcome is LearnOutcome.LEARNED
        pool = await engine.knowledge.brain_pool("orion")
        assert "Compasses point at stubborn things." in pool

    @pytest.mark.asyncio
    async def test_missing_phrase_is_audited_as_empty(self, engine: DuetEngine) -> None:
        result = await engine.learn("veya", None)

        assert result.outcome is LearnOutcome.SKIPPED_EMPTY
        (record,) = await engine.audit.learning()
        assert record.kind is AuditEventKind.SKIP_EMPTY

    @pytest.mark.asyncio
    async def test_unknown_agent_not_audited(self, engine: DuetEngine) -> None:
        with pytest.raises(UnknownAgentError):
            await engine.learn("nova", "Something worth keeping.")
        assert await engine.audit.learning() == []


class TestDialogueControl:
    """Tests for dialogue start/stop through the engine."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, engine: DuetEngine) -> None:
        started = await engine.start_dialogue()
        again = await engine.start_dialogue()
        stopped = await engine.stop_dialogue()

        assert started.state is SchedulerState.RUNNING
        assert started.turn_count == 1
        assert again.turn_count == 1
        assert stopped.state is SchedulerState.IDLE

    @pytest.mark.asyncio
    async def test_shutdown_ends_listeners(self, engine: DuetEngine) -> None:
        subscription = engine.subscribe()
        await engine.start_dialogue()
        await engine.shutdown()

        turns = [turn async for turn in subscription]
        assert [turn.turn for turn in turns] == [1]
        assert engine.scheduler.status().subscribers == 0
