"""End-to-end flows over the file-backed store."""

import json
import random
from pathlib import Path

import pytest

from duet.config.models import DialogueConfig, StorageConfig
from duet.config.settings import Settings
from duet.engine import DuetEngine
from duet.learning import LearnOutcome

PHRASE = "I enjoy discussing orbital mechanics."


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "both_brain.txt").write_text(
        "# shared answers\nhello = Hi there!\nfavorite color = Blue | Green\n",
        encoding="utf-8",
    )
    (assets / "veya_brain.txt").write_text(
        "The moon keeps its face turned to us.\nvega = a bright star\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def file_settings(data_dir: Path) -> Settings:
    return Settings(
        storage=StorageConfig(backend="file", base_dir=str(data_dir)),
        dialogue=DialogueConfig(tick_interval_seconds=3600, max_turns=4),
    )


def make_engine(settings: Settings, seed: int = 3) -> DuetEngine:
    return DuetEngine.from_settings(settings, rng=random.Random(seed))


class TestLearnThenRecall:
    """A learned phrase becomes part of what an agent says."""

    @pytest.mark.asyncio
    async def test_learned_phrase_is_eventually_drawn(self, file_settings: Settings) -> None:
        engine = make_engine(file_settings)

        result = await engine.learn("veya", PHRASE)
        assert result.outcome is LearnOutcome.LEARNED

        drawn = [await engine.lookup_brain_line("veya") for _ in range(10)]
        assert PHRASE in drawn
        assert all("=" not in line for line in drawn)

    @pytest.mark.asyncio
    async def test_brain_survives_restart(
        self, file_settings: Settings, data_dir: Path
    ) -> None:
        await make_engine(file_settings).learn("veya", PHRASE)

        restarted = make_engine(file_settings)
        assert PHRASE in await restarted.knowledge.brain_pool("veya")
        duplicate = await restarted.learn("veya", PHRASE)
        assert duplicate.outcome is LearnOutcome.SKIPPED_DUPLICATE

        lines = (data_dir / "assets" / "veya_brain.txt").read_text(encoding="utf-8").splitlines()
        assert lines.count(PHRASE) == 1

    @pytest.mark.asyncio
    async def test_audit_streams_written(
        self, file_settings: Settings, data_dir: Path
    ) -> None:
        engine = make_engine(file_settings)
        await engine.learn("veya", PHRASE)
        await engine.learn("veya", "x = y")
        await engine.ask("orion", "hello")

        learning = (data_dir / "logs" / "learning.log").read_text(encoding="utf-8").splitlines()
        interactions = (
            (data_dir / "logs" / "interactions.log").read_text(encoding="utf-8").splitlines()
        )
        assert [json.loads(line)["kind"] for line in learning] == ["learn", "skip-qa"]
        assert [json.loads(line)["kind"] for line in interactions] == ["learn", "qa-hit"]


class TestDialogueRun:
    """A full scheduled run over real files."""

    @pytest.mark.asyncio
    async def test_run_to_turn_bound(self, file_settings: Settings, data_dir: Path) -> None:
        engine = make_engine(file_settings)
        subscription = engine.subscribe()

        await engine.start_dialogue()
        while await engine.scheduler.step_once() is not None:
            pass
        await engine.shutdown()

        turns = [turn async for turn in subscription]
        assert [turn.agent for turn in turns] == ["veya", "orion", "veya", "orion"]
        assert all(turn.text for turn in turns)
        assert engine.scheduler.status().state.value == "idle"

        interactions = (data_dir / "logs" / "interactions.log").read_text(encoding="utf-8")
        assert interactions.count('"scheduled-say"') == 4
