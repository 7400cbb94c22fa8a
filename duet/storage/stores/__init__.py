"""LogStore implementations."""

from duet.storage.stores.file import FileAppendLog, FileLogStore
from duet.storage.stores.inmemory import InMemoryAppendLog, InMemoryLogStore

__all__ = [
    "FileAppendLog",
    "FileLogStore",
    "InMemoryAppendLog",
    "InMemoryLogStore",
]
