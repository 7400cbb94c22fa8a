"""API route registration."""

from fastapi import APIRouter, FastAPI

from duet.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all routes."""
    router = APIRouter(prefix="/v1")

    from duet.api.routes.agents import router as agents_router
    from duet.api.routes.ask import router as ask_router
    from duet.api.routes.dialogue import router as dialogue_router
    from duet.api.routes.learn import router as learn_router

    router.include_router(agents_router, tags=["Agents"])
    router.include_router(ask_router, tags=["Ask"])
    router.include_router(learn_router, tags=["Learn"])
    router.include_router(dialogue_router, tags=["Dialogue"])

    return router


def register_routes(app: FastAPI, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(create_v1_router())

    from duet.api.routes.health import metrics_router
    from duet.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered", metrics=metrics_enabled)
