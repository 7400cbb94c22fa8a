"""Scheduled dialogue control and live event stream."""

from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from duet.api.dependencies import EngineDep
from duet.dialogue import DialogueStatus
from duet.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/dialogue")


@router.get("", response_model=DialogueStatus)
async def dialogue_status(engine: EngineDep) -> DialogueStatus:
    """Current scheduler state."""
    return engine.scheduler.status()


@router.post("/start", response_model=DialogueStatus)
async def start_dialogue(engine: EngineDep) -> DialogueStatus:
    """Start the dialogue. Starting a running dialogue changes nothing."""
    return await engine.start_dialogue()


@router.post("/stop", response_model=DialogueStatus)
async def stop_dialogue(engine: EngineDep) -> DialogueStatus:
    """Stop the dialogue. Stopping an idle dialogue changes nothing."""
    return await engine.stop_dialogue()


@router.get("/events")
async def dialogue_events(request: Request, engine: EngineDep) -> EventSourceResponse:
    """Stream dialogue turns as Server-Sent Events (event name ``turn``)."""
    subscription = engine.subscribe()
    logger.info("dialogue_listener_connected")

    async def event_generator() -> AsyncGenerator[dict[str, str], None]:
        try:
            async for turn in subscription:
                if await request.is_disconnected():
                    break
                yield {"event": "turn", "data": turn.model_dump_json()}
        finally:
            subscription.close()
            logger.info("dialogue_listener_disconnected")

    return EventSourceResponse(event_generator())
