"""Agent identity configuration."""

from pydantic import BaseModel, Field, field_validator


class AgentProfile(BaseModel):
    """A named conversational agent and the store holding its brain lines."""

    id: str = Field(..., min_length=1, description="Lowercase agent identifier")
    display_name: str = Field(..., min_length=1, description="Name shown to listeners")
    brain_key: str = Field(..., min_length=1, description="Append-log key of the brain store")

    @field_validator("id")
    @classmethod
    def _lowercase_id(cls, value: str) -> str:
        return value.strip().lower()


def default_agents() -> list[AgentProfile]:
    """The two agents shipped by default."""
    return [
        AgentProfile(id="veya", display_name="Veya", brain_key="assets/veya_brain.txt"),
        AgentProfile(id="orion", display_name="Orion", brain_key="assets/orion_brain.txt"),
    ]
