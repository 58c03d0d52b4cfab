"""structlog setup and per-request access logging."""

import logging
import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

# Health checks are frequent and uninteresting
QUIET_PATHS = frozenset({"/health", "/health/ready"})


def configure_logging(log_level: str) -> None:
    """Console logging filtered at ``log_level``, with request context merged in."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level)
        ),
        cache_logger_on_first_use=True,
    )


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Binds request context for every log line and records the outcome.

    Error responses are always logged, at error level for 5xx and warning
    for 4xx. Successful health checks are not.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            # Set by RequestIDMiddleware, which wraps this one
            request_id=getattr(request.state, "request_id", "unknown"),
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        quiet = request.url.path in QUIET_PATHS
        if not quiet:
            logger.info("request_started")

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("request_failed", error=str(exc), duration_ms=_elapsed_ms(start))
            raise

        duration_ms = _elapsed_ms(start)
        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        elif not quiet:
            log = logger.info
        else:
            log = None
        if log is not None:
            log("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers["X-Process-Time"] = str(duration_ms)
        return response
