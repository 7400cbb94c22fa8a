"""Random brain-line picker that avoids its own recent picks."""

import random
import threading
from collections import deque


class NonRepeatingSampler:
    """Uniform sampler with a per-agent cooldown window.

    The last ``cooldown_size`` picks of each agent are excluded from the
    next draw. When every pool member is cooling down the whole pool is
    eligible again. History lives in process memory only.
    """

    def __init__(
        self,
        cooldown_size: int = 3,
        filler_line: str = "I'm thinking about that.",
        rng: random.Random | None = None,
    ) -> None:
        self.cooldown_size = cooldown_size
        self.filler_line = filler_line
        self._rng = rng or random.Random()
        self._history: dict[str, deque[str]] = {}
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, agent: str) -> threading.Lock:
        with self._guard:
            if agent not in self._locks:
                self._locks[agent] = threading.Lock()
                self._history[agent] = deque(maxlen=self.cooldown_size)
            return self._locks[agent]

    def history(self, agent: str) -> list[str]:
        """Recent picks for ``agent``, oldest first."""
        with self._lock_for(agent):
            return list(self._history[agent])

    def pick(self, agent: str, pool: list[str]) -> str:
        """Choose a line for ``agent`` from ``pool`` without recording it.

        An empty pool yields the filler line.
        """
        if not pool:
            return self.filler_line

        with self._lock_for(agent):
            recent = self._history[agent]
            candidates = [line for line in pool if line not in recent]
            return self._rng.choice(candidates or pool)

    def remember(self, agent: str, line: str) -> None:
        """Put a returned line on the agent's cooldown."""
        if self.cooldown_size <= 0:
            return
        with self._lock_for(agent):
            self._history[agent].append(line)

    def sample(self, agent: str, pool: list[str]) -> str:
        """Pick a line for ``agent`` from ``pool`` and put it on cooldown."""
        line = self.pick(agent, pool)
        if pool:
            self.remember(agent, line)
        return line

    def reset(self, agent: str | None = None) -> None:
        """Forget the cooldown history of one agent, or of all agents."""
        with self._guard:
            targets = [agent] if agent is not None else list(self._history)
            for name in targets:
                if name in self._history:
                    self._history[name].clear()
