"""KnowledgeBase: per-agent brain partitions plus the shared QA store."""

import asyncio

from duet.config.models import AgentProfile, KnowledgeConfig
from duet.exceptions import UnknownAgentError
from duet.knowledge.models import QAPair, parse_qa_line
from duet.knowledge.normalizer import collapse_whitespace
from duet.storage import KeyedAppendLog, LogStore


def clean_lines(raw: list[str]) -> list[str]:
    """Trimmed lines with blanks and ``#`` comments removed."""
    lines = (line.strip() for line in raw)
    return [line for line in lines if line and not line.startswith("#")]


class KnowledgeBase:
    """Read and append access to the knowledge of every configured agent.

    Brain lines are owned by one agent and only ever appended. QA pairs are
    curated outside the process and treated as read-only.
    """

    def __init__(
        self,
        log_store: LogStore,
        agents: list[AgentProfile],
        config: KnowledgeConfig,
    ) -> None:
        self._config = config
        self._profiles: dict[str, AgentProfile] = {agent.id: agent for agent in agents}
        self._brains: dict[str, KeyedAppendLog] = {
            agent.id: log_store.open(agent.brain_key) for agent in agents
        }
        self._qa_log = log_store.open(config.qa_key)
        self._write_locks: dict[str, asyncio.Lock] = {
            agent.id: asyncio.Lock() for agent in agents
        }

    @property
    def config(self) -> KnowledgeConfig:
        return self._config

    @property
    def agents(self) -> list[AgentProfile]:
        """Configured agents in declaration order."""
        return list(self._profiles.values())

    def resolve(self, agent: str) -> AgentProfile:
        """Look up an agent case-insensitively.

        Raises:
            UnknownAgentError: If no agent has this id
        """
        profile = self._profiles.get(agent.strip().lower())
        if profile is None:
            raise UnknownAgentError(agent)
        return profile

    def write_lock(self, agent: str) -> asyncio.Lock:
        """Lock serializing check-then-append on one agent's brain."""
        return self._write_locks[self.resolve(agent).id]

    async def brain_lines(self, agent: str) -> list[str]:
        """Every stored line of the agent's brain, in write order."""
        log = self._brains[self.resolve(agent).id]
        return clean_lines(await log.read())

    async def brain_pool(self, agent: str) -> list[str]:
        """Brain lines eligible for sampling and dialogue facts."""
        return [line for line in await self.brain_lines(agent) if self.is_speakable(line)]

    def is_speakable(self, line: str) -> bool:
        """False for QA-formatted lines and lines below the minimum length."""
        return (
            self._config.qa_delimiter not in line
            and len(line) >= self._config.min_line_length
        )

    async def contains_line(self, agent: str, line: str) -> bool:
        """True if the brain already holds ``line`` up to whitespace."""
        target = collapse_whitespace(line)
        return any(collapse_whitespace(stored) == target for stored in await self.brain_lines(agent))

    async def append_brain_line(self, agent: str, line: str) -> None:
        """Append one line to the agent's brain.

        Raises:
            StorageError: If the brain store cannot be written
        """
        await self._brains[self.resolve(agent).id].append(line)

    async def qa_pairs(self) -> list[QAPair]:
        """Parsed QA pairs in store order."""
        pairs = (
            parse_qa_line(line, self._config.qa_delimiter)
            for line in await self._qa_log.read()
        )
        return [pair for pair in pairs if pair is not None]
