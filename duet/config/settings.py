"""Root settings model for duet configuration."""

from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from duet.config.models import (
    AgentProfile,
    APIConfig,
    DialogueConfig,
    KnowledgeConfig,
    ObservabilityConfig,
    StorageConfig,
    default_agents,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# TOML values handed to the settings source by get_settings()
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the merged TOML files."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml
    3. config/{DUET_ENV}.toml
    4. DUET_* environment variables
    """

    model_config = SettingsConfigDict(
        env_prefix="DUET_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="duet", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    agents: list[AgentProfile] = Field(
        default_factory=default_agents,
        min_length=2,
        description="Conversational agents, in dialogue order",
    )
    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)
    dialogue: DialogueConfig = Field(default_factory=DialogueConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @model_validator(mode="after")
    def _unique_agents(self) -> "Settings":
        ids = [agent.id for agent in self.agents]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate agent ids: {ids}")
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Constructor arguments, then DUET_* variables, then TOML."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
