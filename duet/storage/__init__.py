"""Append-only storage for brain lines, QA pairs and audit streams."""

from duet.config.models import StorageConfig
from duet.storage.log import KeyedAppendLog, LogStore, flatten_line
from duet.storage.stores import FileLogStore, InMemoryLogStore


def create_log_store(config: StorageConfig) -> LogStore:
    """Build the LogStore selected by configuration."""
    if config.backend == "inmemory":
        return InMemoryLogStore()
    return FileLogStore(config.base_dir)


__all__ = [
    "KeyedAppendLog",
    "LogStore",
    "FileLogStore",
    "InMemoryLogStore",
    "create_log_store",
    "flatten_line",
]
