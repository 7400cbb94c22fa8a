"""Knowledge domain models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QAPair(BaseModel):
    """A curated question and its answer, shared by every agent."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., min_length=1, description="Stored question")
    answer: str = Field(..., min_length=1, description="Answer returned on match")

    @field_validator("question", "answer", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value


def parse_qa_line(line: str, delimiter: str = "=") -> QAPair | None:
    """Parse one ``question = answer`` line.

    A line without the delimiter answers itself. Blank lines, ``#``
    comments and pairs with an empty side yield None.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    question, sep, answer = line.partition(delimiter)
    if not sep:
        answer = question
    question, answer = question.strip(), answer.strip()
    if not question or not answer:
        return None
    return QAPair(question=question, answer=answer)


class AskResult(BaseModel):
    """Answer to a direct question put to one agent."""

    agent: str = Field(..., description="Agent asked")
    question: str = Field(..., description="Question as received")
    matched: bool = Field(..., description="Whether a QA pair answered it")
    answer: str = Field(..., description="Matched answer or the unknown-answer filler")
    match_pass: str | None = Field(default=None, description="exact, prefix or contains")


class AskBothResult(BaseModel):
    """Answer to a question put to every agent at once."""

    question: str = Field(..., description="Question as received")
    matched: bool = Field(..., description="Whether a QA pair answered it")
    responses: dict[str, str] = Field(..., description="Agent id to that agent's part")
