"""Duet: knowledge matching and scripted dialogue for two conversational agents.

Each agent owns an append-only brain of freeform lines, both share a curated
set of question/answer pairs, and a scheduler can run an unattended
two-agent dialogue that is broadcast to live listeners.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
