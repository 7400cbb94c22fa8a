"""TOML configuration loader with deep merge support."""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "DUET_CONFIG_DIR"
ENVIRONMENT_ENV = "DUET_ENV"


def get_config_dir() -> Path:
    """Locate the configuration directory.

    DUET_CONFIG_DIR wins when set; otherwise the nearest ``config/``
    directory walking up from the working directory.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    current = Path.cwd()
    for candidate in (current, *current.parents[:4]):
        if (candidate / "config").is_dir():
            return candidate / "config"
    return Path("config")


def get_environment() -> str:
    """Current environment name, ``development`` unless DUET_ENV is set."""
    return os.environ.get(ENVIRONMENT_ENV, "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Load ``default.toml`` and overlay ``{DUET_ENV}.toml`` when present."""
    config_dir = get_config_dir()
    default_path = config_dir / "default.toml"
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or set {CONFIG_DIR_ENV}."
        )

    config = load_toml(default_path)
    env_path = config_dir / f"{get_environment()}.toml"
    if env_path.exists():
        config = deep_merge(config, load_toml(env_path))
    return config
