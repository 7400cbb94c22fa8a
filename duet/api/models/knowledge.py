"""Request and response models for ask, learn and brain endpoints."""

from pydantic import BaseModel, Field

from duet.learning import LearnOutcome


class AskRequest(BaseModel):
    """Body of POST /v1/ask."""

    speaker: str = Field(default="veya", description="Agent being asked")
    input: str | None = Field(default=None, description="Question text")


class AskResponse(BaseModel):
    """Answer from one agent."""

    ok: bool = Field(..., description="True when a QA pair matched")
    speaker: str
    response: str
    match: str | None = Field(default=None, description="exact, prefix or contains")


class AskBothRequest(BaseModel):
    """Body of POST /v1/ask-both."""

    input: str | None = Field(default=None, description="Question text")


class AskBothResponse(BaseModel):
    """Answers from every agent."""

    ok: bool
    response: dict[str, str] = Field(..., description="Agent id to reply")


class LearnRequest(BaseModel):
    """Body of POST /v1/learn."""

    speaker: str = Field(..., description="Agent that should learn the phrase")
    phrase: str | None = Field(default=None, description="Freeform text")


class LearnResponse(BaseModel):
    """Outcome of a learning attempt."""

    ok: bool = Field(..., description="True when the request was accepted")
    speaker: str
    outcome: LearnOutcome
    reason: str
    text: str


class BrainResponse(BaseModel):
    """A line drawn from an agent's brain."""

    speaker: str
    response: str


class AgentResponse(BaseModel):
    """A configured agent."""

    id: str
    display_name: str
