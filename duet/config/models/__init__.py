"""Configuration model exports.

    from duet.config.models import DialogueConfig, KnowledgeConfig
"""

from duet.config.models.agents import AgentProfile, default_agents
from duet.config.models.api import APIConfig
from duet.config.models.dialogue import DialogueConfig, default_topics
from duet.config.models.knowledge import KnowledgeConfig
from duet.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from duet.config.models.storage import StorageConfig

__all__ = [
    "AgentProfile",
    "APIConfig",
    "DialogueConfig",
    "KnowledgeConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StorageConfig",
    "default_agents",
    "default_topics",
]
