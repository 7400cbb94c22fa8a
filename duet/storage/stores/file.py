"""File-backed implementation of LogStore.

Each key is a path relative to the store's base directory. Files and parent
directories are created on first use. Blocking I/O runs in a worker thread
so the event loop is never stalled by a slow disk.
"""

import asyncio
from pathlib import Path

from duet.exceptions import StorageError
from duet.observability.logging import get_logger
from duet.storage.log import KeyedAppendLog, LogStore, flatten_line

logger = get_logger(__name__)


class FileAppendLog(KeyedAppendLog):
    """Append log stored as a UTF-8 text file, one entry per line."""

    def __init__(self, key: str, path: Path) -> None:
        super().__init__(key)
        self.path = path

    async def read(self) -> list[str]:
        return await asyncio.to_thread(self._read_sync)

    async def append(self, text: str) -> None:
        await asyncio.to_thread(self._append_sync, flatten_line(text))

    def _read_sync(self) -> list[str]:
        if not self.path.exists():
            return []
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("append_log_read_failed", key=self.key, error=str(e))
            raise StorageError(self.key, str(e)) from e
        return content.splitlines()

    def _append_sync(self, line: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.error("append_log_write_failed", key=self.key, error=str(e))
            raise StorageError(self.key, str(e)) from e


class FileLogStore(LogStore):
    """LogStore rooted at a directory on the local filesystem."""

    def __init__(self, base_dir: Path | str) -> None:
        self.base_dir = Path(base_dir)
        self._logs: dict[str, FileAppendLog] = {}

    def open(self, key: str) -> FileAppendLog:
        if key not in self._logs:
            self._logs[key] = FileAppendLog(key, self.base_dir / key)
        return self._logs[key]
