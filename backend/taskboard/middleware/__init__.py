"""Middleware package."""

from taskboard.middleware.logging import LoggingMiddleware, configure_logging
from taskboard.middleware.request_id import RequestIDMiddleware

__all__ = ["LoggingMiddleware", "RequestIDMiddleware", "configure_logging"]
