"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from duet import __version__
from duet.api.dependencies import get_settings, shutdown_engine
from duet.api.exceptions import DuetAPIError, from_core_error
from duet.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from duet.api.routes import register_routes
from duet.exceptions import DuetError
from duet.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Stop the dialogue and release listeners on shutdown."""
    yield
    await shutdown_engine()
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI app with CORS, exception handlers and all routes
    """
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        max_payload_chars=log_config.max_payload_chars,
    )

    app = FastAPI(
        title="Duet API",
        description="Knowledge matching and scheduled dialogue for two agents",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    register_routes(app, metrics_enabled=settings.observability.metrics.enabled)

    logger.info(
        "app_created",
        debug=settings.debug,
        agents=[agent.id for agent in settings.agents],
    )
    return app


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=body).model_dump(mode="json", exclude_none=True),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(DuetAPIError)
    async def duet_api_error_handler(request: Request, exc: DuetAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(
            exc.status_code, ErrorBody(code=exc.error_code, message=exc.message)
        )

    @app.exception_handler(DuetError)
    async def core_error_handler(request: Request, exc: DuetError) -> JSONResponse:
        return await duet_api_error_handler(request, from_core_error(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)
        details = [
            ErrorDetail(field=".".join(str(loc) for loc in error["loc"]), message=error["msg"])
            for error in exc.errors()
        ]
        return _error_response(
            400,
            ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(
            500,
            ErrorBody(code=ErrorCode.INTERNAL_ERROR, message="An unexpected error occurred"),
        )


# Create the app instance for uvicorn
app = create_app()
