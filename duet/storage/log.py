"""KeyedAppendLog and LogStore abstract interfaces."""

from abc import ABC, abstractmethod


class KeyedAppendLog(ABC):
    """An append-only sequence of text lines identified by a key.

    Lines are returned in write order. Nothing is ever rewritten or
    removed once appended.
    """

    def __init__(self, key: str) -> None:
        self.key = key

    @abstractmethod
    async def read(self) -> list[str]:
        """Return every appended line, oldest first."""
        pass

    @abstractmethod
    async def append(self, text: str) -> None:
        """Append one line.

        Raises:
            StorageError: If the line could not be persisted
        """
        pass


class LogStore(ABC):
    """Factory for the append logs of one storage backend."""

    @abstractmethod
    def open(self, key: str) -> KeyedAppendLog:
        """Return the log for ``key``; the same key yields the same log."""
        pass


def flatten_line(text: str) -> str:
    """Collapse line breaks so one append always produces one line."""
    return " ".join(text.splitlines()).rstrip()
