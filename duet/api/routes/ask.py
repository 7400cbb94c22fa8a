"""Question lookup endpoints."""

from fastapi import APIRouter

from duet.api.dependencies import EngineDep
from duet.api.models.knowledge import (
    AskBothRequest,
    AskBothResponse,
    AskRequest,
    AskResponse,
)
from duet.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest, engine: EngineDep) -> AskResponse:
    """Answer a question from the shared QA store.

    Unknown questions are not an error: ``ok`` is false and the response
    is a filler line.
    """
    result = await engine.ask(request.speaker, request.input)
    return AskResponse(
        ok=result.matched,
        speaker=result.agent,
        response=result.answer,
        match=result.match_pass,
    )


@router.post("/ask-both", response_model=AskBothResponse)
async def ask_both(request: AskBothRequest, engine: EngineDep) -> AskBothResponse:
    """Answer a question with one reply per agent."""
    result = await engine.ask_both(request.input)
    return AskBothResponse(ok=result.matched, response=result.responses)
