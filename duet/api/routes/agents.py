"""Agent listing and brain-line endpoints."""

from fastapi import APIRouter

from duet.api.dependencies import EngineDep
from duet.api.models.knowledge import AgentResponse, BrainResponse
from duet.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/agents")


@router.get("", response_model=list[AgentResponse])
async def list_agents(engine: EngineDep) -> list[AgentResponse]:
    """List the configured agents in dialogue order."""
    return [
        AgentResponse(id=agent.id, display_name=agent.display_name)
        for agent in engine.knowledge.agents
    ]


@router.get("/{agent}/brain", response_model=BrainResponse)
async def brain_line(agent: str, engine: EngineDep) -> BrainResponse:
    """Draw a freeform line from the agent's brain.

    Recently drawn lines are skipped while others are available. An agent
    with an empty brain answers with a filler line.
    """
    line = await engine.lookup_brain_line(agent)
    return BrainResponse(speaker=engine.knowledge.resolve(agent).id, response=line)
