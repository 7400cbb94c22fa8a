"""Scheduled dialogue configuration."""

from pydantic import BaseModel, Field, model_validator


def default_topics() -> list[str]:
    """Topics the dialogue scheduler chooses from."""
    return [
        "the night sky",
        "orbital mechanics",
        "music",
        "memory",
        "the ocean",
        "learning new things",
        "cities at night",
        "old books",
    ]


class DialogueConfig(BaseModel):
    """Configuration for the turn-taking dialogue scheduler."""

    tick_interval_seconds: float = Field(
        default=3.5,
        gt=0,
        description="Delay between scheduled turns",
    )
    max_turns: int = Field(
        default=40,
        ge=1,
        description="Turns produced before the scheduler goes idle",
    )
    topics: list[str] = Field(
        default_factory=default_topics,
        min_length=1,
        description="Topic pool",
    )
    topic_switch_min: int = Field(
        default=4,
        ge=1,
        description="Shortest topic period in turns",
    )
    topic_switch_max: int = Field(
        default=8,
        ge=1,
        description="Longest topic period in turns",
    )
    question_probability: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Share of turns that ask the partner a question",
    )
    statement_probability: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Share of turns that state a remembered fact",
    )
    facts_per_turn: int = Field(
        default=3,
        ge=0,
        description="Remembered facts offered to the template per agent",
    )
    subscriber_queue_size: int = Field(
        default=100,
        ge=1,
        description="Buffered turns per listener before drops",
    )
    learn_from_dialogue: bool = Field(
        default=False,
        description="Feed generated lines back through the learning pipeline",
    )

    @model_validator(mode="after")
    def _check_bands(self) -> "DialogueConfig":
        if self.topic_switch_min > self.topic_switch_max:
            raise ValueError("topic_switch_min must not exceed topic_switch_max")
        if self.question_probability + self.statement_probability > 1.0:
            raise ValueError("question and statement probabilities exceed 1.0")
        return self
