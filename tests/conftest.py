"""Shared test fixtures for the duet test suite."""

import os
import random
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from duet.audit import AuditLog
from duet.config.models import DialogueConfig, KnowledgeConfig, StorageConfig
from duet.config.settings import Settings, set_toml_config
from duet.engine import DuetEngine
from duet.knowledge import KnowledgeBase
from duet.storage import InMemoryLogStore

QA_LINES = [
    "# curated answers",
    "hello = Hi there!",
    "what is your name = I'm one of a pair.",
    "favorite color = Blue | Green",
    "",
]


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"DUET_DEBUG": "true"}):
                ...
    """
    return EnvOverrideContext


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Isolate configuration between tests."""
    from duet.config import get_settings

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def settings() -> Settings:
    """In-memory settings with a dialogue that only advances when stepped."""
    return Settings(
        storage=StorageConfig(backend="inmemory"),
        knowledge=KnowledgeConfig(),
        dialogue=DialogueConfig(tick_interval_seconds=3600, max_turns=6),
    )


@pytest.fixture
def log_store() -> InMemoryLogStore:
    """Seeded in-memory storage."""
    return InMemoryLogStore(
        {
            "assets/both_brain.txt": list(QA_LINES),
            "assets/veya_brain.txt": [
                "I love the color of the sky at dusk.",
                "Stars are older than memory.",
            ],
            "assets/orion_brain.txt": [
                "Maps are promises about places.",
            ],
        }
    )


@pytest.fixture
def knowledge(log_store: InMemoryLogStore, settings: Settings) -> KnowledgeBase:
    return KnowledgeBase(log_store, settings.agents, settings.knowledge)


@pytest.fixture
def audit(log_store: InMemoryLogStore, settings: Settings) -> AuditLog:
    return AuditLog(
        log_store.open(settings.storage.interactions_key),
        log_store.open(settings.storage.learning_key),
    )


@pytest.fixture
def engine(settings: Settings, log_store: InMemoryLogStore) -> DuetEngine:
    """Engine over seeded in-memory storage with a fixed random seed."""
    return DuetEngine.from_settings(settings, log_store=log_store, rng=random.Random(7))
