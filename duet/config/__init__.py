"""Configuration loading for duet.

Usage:
    from duet.config import get_settings

    settings = get_settings()
    interval = settings.dialogue.tick_interval_seconds
"""

from functools import lru_cache

from duet.config.loader import load_config
from duet.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance.

    Missing TOML files fall back to code defaults; DUET_* environment
    variables still apply. Call ``get_settings.cache_clear()`` to reload.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError:
        set_toml_config({})
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and load configuration again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
