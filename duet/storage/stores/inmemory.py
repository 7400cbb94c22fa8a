"""In-memory implementation of LogStore."""

from duet.storage.log import KeyedAppendLog, LogStore, flatten_line


class InMemoryAppendLog(KeyedAppendLog):
    """List-backed append log for testing and development."""

    def __init__(self, key: str, lines: list[str] | None = None) -> None:
        super().__init__(key)
        self._lines: list[str] = list(lines or [])

    async def read(self) -> list[str]:
        return list(self._lines)

    async def append(self, text: str) -> None:
        self._lines.append(flatten_line(text))


class InMemoryLogStore(LogStore):
    """In-memory LogStore. Contents vanish with the process."""

    def __init__(self, seed: dict[str, list[str]] | None = None) -> None:
        self._logs: dict[str, InMemoryAppendLog] = {
            key: InMemoryAppendLog(key, lines) for key, lines in (seed or {}).items()
        }

    def open(self, key: str) -> InMemoryAppendLog:
        if key not in self._logs:
            self._logs[key] = InMemoryAppendLog(key)
        return self._logs[key]
