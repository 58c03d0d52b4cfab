"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskboard.ai.providers.base import AIProvider
from taskboard.ai.service import TaskExtractionService
from taskboard.api import router as api_router
from taskboard.config import Settings, get_settings
from taskboard.db.schema import init_schema
from taskboard.db.session import Database
from taskboard.exceptions import TaskboardError
from taskboard.middleware.logging import LoggingMiddleware, configure_logging
from taskboard.middleware.request_id import RequestIDMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info("Starting Taskboard API", version=settings.app_version)
    await init_schema(database)

    yield

    # Shutdown
    logger.info("Shutting down Taskboard API")
    await database.close()
    logger.info("Database connection closed")


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> ORJSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", code=exc.code, error=exc.message)
    return ORJSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Report malformed bodies and parameters as a single 400 message."""
    errors = exc.errors()
    if not errors:
        message = "invalid request"
    else:
        first = errors[0]
        # ("body", "title") -> "title"; positions inside raw JSON are dropped
        location = ".".join(
            str(part)
            for part in first.get("loc", ())
            if isinstance(part, str) and part not in ("body", "path", "query")
        )
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return ORJSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception("Unhandled error", error=str(exc))
    return ORJSONResponse(status_code=500, content={"error": "internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    ai_provider: Optional[AIProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        ai_provider: Provider for task extraction instead of one built from
            settings
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Task tracking with projects, assignees, sprints and AI task extraction",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.extraction_service = TaskExtractionService(settings, provider=ai_provider)

    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    # Handled inside the middleware stack, so CORS and request-id headers survive
    app.add_exception_handler(SQLAlchemyError, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Add middleware (order matters - last added is first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


def run() -> None:
    """Serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
