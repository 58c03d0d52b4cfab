"""Per-request correlation id."""

import re
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up in log lines and response headers
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a well-formed client id, otherwise mint a new one."""
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Stores the id on ``request.state`` and echoes it in the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response
