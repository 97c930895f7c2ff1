"""
NoteKeeper Backend - Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer health checks.
How:   The store is in memory, so a response at all means the service is up;
       the note count is reported for quick sanity checks.
"""

import logging
import time

from fastapi import APIRouter, Depends

from notekeeper import __version__
from notekeeper.schemas.note import HealthResponse
from notekeeper.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    service: NoteService = Depends(get_note_service),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        note_count=len(service.store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
