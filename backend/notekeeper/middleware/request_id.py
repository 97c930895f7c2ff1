"""
NoteKeeper Backend - Request ID Middleware
===========================================

What:  Gives every request a correlation ID and echoes it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is 1-64 characters of
       letters, digits, "-", "_" or "."; anything else is replaced by a short
       generated ID so raw header text never lands in the access log. The ID
       is kept in a ContextVar for loggers and exception handlers and in
       request.state for route handlers.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"
CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Return the client's ID if it is safe to log, otherwise a fresh one."""
    if supplied and CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(HEADER))
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[HEADER] = rid
        return response
