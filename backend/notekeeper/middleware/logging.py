"""
NoteKeeper Backend - Access Log Middleware
===========================================

What:  One access line per request, annotated with what the request touched.
How:   Route code leaves breadcrumbs on request.state:
           note_id       set by the notes router for /notes/.../{note_id}
           search_hits   set by GET /notes/search (None: no query given)
       After the response is produced they are appended to the line, e.g.

           DELETE /notes/tags/2 200 0.4ms [a1b2c3d4] note=2
           GET /notes/search 404 0.3ms [e5f6a7b8] hits=0
           GET /notes/search 404 0.2ms [0c1d2e3f] hits=none

       5xx logs at ERROR, 4xx at WARNING, the rest at INFO. A 404 search is
       therefore a WARNING even though it is the normal "nothing found" reply.

Request bodies are never logged; note text and tags stay out of the logs.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")

UNSET = object()


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def note_context(request: Request) -> Dict[str, Any]:
    """Collect the note id and search outcome left on request.state."""
    context: Dict[str, Any] = {}
    note_id = getattr(request.state, "note_id", UNSET)
    if note_id is not UNSET:
        context["note"] = note_id
    hits = getattr(request.state, "search_hits", UNSET)
    if hits is not UNSET:
        context["hits"] = "none" if hits is None else hits
    return context


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the notekeeper.access line for every request but /health."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        context = note_context(request)
        suffix = "".join(f" {key}={value}" for key, value in context.items())

        logger.log(
            level_for(response.status_code),
            "%s %s %d %.1fms [%s]%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            suffix,
            extra={"note_context": context},
        )
        return response
