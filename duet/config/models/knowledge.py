"""Knowledge base, matching and sampling configuration."""

from pydantic import BaseModel, Field


class KnowledgeConfig(BaseModel):
    """Configuration for brain stores, QA lookup and the sampler."""

    qa_key: str = Field(
        default="assets/both_brain.txt",
        description="Append-log key of the curated question/answer store",
    )
    qa_delimiter: str = Field(
        default="=",
        min_length=1,
        max_length=1,
        description="Character separating question from answer",
    )
    both_separator: str = Field(
        default="|",
        min_length=1,
        description="Separator between per-agent parts of an ask-both answer",
    )
    min_line_length: int = Field(
        default=4,
        ge=1,
        description="Minimum length of a brain line",
    )
    cooldown_size: int = Field(
        default=3,
        ge=0,
        description="Recent sampler picks excluded from the next draw",
    )
    filler_line: str = Field(
        default="I'm thinking about that.",
        description="Returned when an agent has nothing to say",
    )
    unknown_answer: str = Field(
        default="Sorry, I don't know that yet.",
        description="Returned when no QA pair matches",
    )
    unknown_answer_alt: str = Field(
        default="Let's circle back later.",
        description="Second agent's reply when an ask-both question is unknown",
    )
    missing_part: str = Field(
        default="…",
        description="Placeholder for an absent per-agent part of an ask-both answer",
    )
