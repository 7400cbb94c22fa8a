"""Health check and metrics endpoints."""

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from duet import __version__
from duet.api.dependencies import EngineDep
from duet.exceptions import StorageError
from duet.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


class HealthResponse(BaseModel):
    """Service health summary."""

    status: Literal["healthy", "unhealthy"]
    version: str
    dialogue: str
    timestamp: datetime
    message: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(engine: EngineDep) -> HealthResponse:
    """Report whether the knowledge stores can be read."""
    try:
        await engine.knowledge.qa_pairs()
        status: Literal["healthy", "unhealthy"] = "healthy"
        message = None
    except StorageError as e:
        logger.warning("health_check_storage_failed", error=e.message)
        status, message = "unhealthy", e.message

    return HealthResponse(
        status=status,
        version=__version__,
        dialogue=engine.scheduler.state.value,
        timestamp=datetime.now(UTC),
        message=message,
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
