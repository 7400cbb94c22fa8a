"""Learning endpoint."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from duet.api.dependencies import EngineDep
from duet.api.models.knowledge import LearnRequest, LearnResponse
from duet.learning import LearnOutcome
from duet.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Learned is a success, garbage/duplicate are accepted without effect,
# empty/QA-format are rejected, and a storage fault is a failure.
OUTCOME_STATUS: dict[LearnOutcome, int] = {
    LearnOutcome.LEARNED: 201,
    LearnOutcome.SKIPPED_GARBAGE: 202,
    LearnOutcome.SKIPPED_DUPLICATE: 202,
    LearnOutcome.SKIPPED_EMPTY: 400,
    LearnOutcome.SKIPPED_QA_FORMAT: 400,
    LearnOutcome.FAILED: 500,
}


@router.post("/learn", response_model=LearnResponse)
async def learn(request: LearnRequest, engine: EngineDep) -> JSONResponse:
    """Offer a freeform phrase to an agent's brain.

    The body always reports the outcome; the status code tells success,
    accepted-without-effect, rejection and failure apart.
    """
    result = await engine.learn(request.speaker, request.phrase)
    response = LearnResponse(
        ok=result.outcome.accepted,
        speaker=result.agent,
        outcome=result.outcome,
        reason=result.reason,
        text=result.text,
    )
    return JSONResponse(
        status_code=OUTCOME_STATUS[result.outcome],
        content=response.model_dump(mode="json"),
    )
