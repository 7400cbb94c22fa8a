"""AuditLog: the two append-only audit streams."""

import asyncio

from pydantic import ValidationError

from duet.audit.models import AuditEventKind, AuditRecord
from duet.observability.logging import get_logger
from duet.storage import KeyedAppendLog

logger = get_logger(__name__)


class AuditLog:
    """Writes AuditRecords as JSON lines to two independent streams.

    The interaction stream receives one record per ask, brain draw,
    successful learn and scheduled turn. The learning stream receives one
    record per learning attempt, whatever its outcome, with the skip reason.
    Each stream has its own lock so concurrent writers never interleave.
    """

    def __init__(self, interactions: KeyedAppendLog, learning: KeyedAppendLog) -> None:
        self._interactions = interactions
        self._learning = learning
        self._interactions_lock = asyncio.Lock()
        self._learning_lock = asyncio.Lock()

    async def record(
        self,
        agent: str,
        kind: AuditEventKind,
        payload: str = "",
    ) -> AuditRecord:
        """Append an interaction record.

        Raises:
            StorageError: If the stream cannot be written
        """
        async with self._interactions_lock:
            entry = AuditRecord(agent=agent, kind=kind, payload=payload)
            await self._interactions.append(entry.model_dump_json())
        return entry

    async def record_learning(
        self,
        agent: str,
        kind: AuditEventKind,
        payload: str,
        reason: str,
    ) -> AuditRecord:
        """Append a learning-attempt record.

        Raises:
            StorageError: If the stream cannot be written
        """
        async with self._learning_lock:
            entry = AuditRecord(agent=agent, kind=kind, payload=payload, reason=reason)
            await self._learning.append(entry.model_dump_json())
        return entry

    async def interactions(self) -> list[AuditRecord]:
        """Parsed interaction records, oldest first."""
        return self._parse(await self._interactions.read(), self._interactions.key)

    async def learning(self) -> list[AuditRecord]:
        """Parsed learning records, oldest first."""
        return self._parse(await self._learning.read(), self._learning.key)

    @staticmethod
    def _parse(lines: list[str], key: str) -> list[AuditRecord]:
        records = []
        for line in lines:
            if not line.strip():
                continue
            try:
                records.append(AuditRecord.model_validate_json(line))
            except ValidationError:
                logger.warning("audit_line_unparseable", key=key, line=line)
        return records
