"""Dependency injection for API routes.

The engine is created once per process from settings. Tests override
get_engine / get_settings through ``app.dependency_overrides`` or call
reset_dependencies() between cases.
"""

from typing import Annotated

from fastapi import Depends

from duet.config import get_settings as load_settings
from duet.config.settings import Settings
from duet.engine import DuetEngine
from duet.observability.logging import get_logger

logger = get_logger(__name__)

_engine: DuetEngine | None = None


def get_settings() -> Settings:
    """Application settings (cached by duet.config)."""
    return load_settings()


def get_engine(settings: Annotated[Settings, Depends(get_settings)]) -> DuetEngine:
    """The shared DuetEngine, created on first use."""
    global _engine
    if _engine is None:
        _engine = DuetEngine.from_settings(settings)
        logger.info("engine_initialized", storage=settings.storage.backend)
    return _engine


async def shutdown_engine() -> None:
    """Stop the dialogue and close every listener of the shared engine."""
    if _engine is not None:
        await _engine.shutdown()


async def reset_dependencies() -> None:
    """Drop the cached engine and settings. Used by tests."""
    global _engine
    await shutdown_engine()
    _engine = None
    load_settings.cache_clear()


SettingsDep = Annotated[Settings, Depends(get_settings)]
EngineDep = Annotated[DuetEngine, Depends(get_engine)]
