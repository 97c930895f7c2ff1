"""
NoteKeeper Backend - Notes Route Handlers
==========================================

What:  HTTP endpoints for notes, note tags and tag search.
How:   Extracts path/query/body data, delegates to NoteService, returns JSON.
       Errors raised by the service are turned into responses by the
       handlers registered in main.register_exception_handlers().

Route order matters: /notes/search and /notes/tags/{id} are declared before
/notes/{id} so the literal segments are not captured as an id.
"""

import json
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from notekeeper.config import settings
from notekeeper.schemas.note import (
    ErrorResponse,
    NoteCreateRequest,
    NoteResponse,
    NoteUpdateRequest,
)
from notekeeper.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)


async def record_note_id(request: Request) -> None:
    """Expose the addressed note id to the access log."""
    note_id = request.path_params.get("note_id")
    if note_id is not None:
        request.state.note_id = note_id


router = APIRouter(
    prefix="/notes",
    tags=["Notes"],
    dependencies=[Depends(record_note_id)],
)

TAGS_BODY_OPENAPI = {
    "requestBody": {
        "description": "JSON array of tag strings; non-string items are ignored",
        "content": {
            "application/json": {
                "schema": {"type": "array", "items": {"type": "string"}},
            },
        },
    },
}


def _to_response(note) -> NoteResponse:
    return NoteResponse.model_validate(note)


async def read_tags_payload(request: Request) -> Any:
    """
    Decode the raw tag body.

    Empty or malformed JSON yields None, which the service rejects with the
    plain-text 400 once the note is known to exist.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.debug("Unparseable tag body (%d bytes)", len(raw))
        return None


# ── Notes collection ─────────────────────────────────────────────────────


@router.post(
    "",
    response_model=NoteResponse,
    summary="Create a note",
)
async def create_note(
    payload: Optional[NoteCreateRequest] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    payload = payload or NoteCreateRequest()
    note = service.create_note(
        title=payload.title,
        body=payload.body,
        created_by=payload.created_by,
    )
    return _to_response(note)


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    return [_to_response(note) for note in service.list_notes()]


# ── Search ────────────────────────────────────────────────────────────────


@router.get(
    "/search",
    response_model=List[NoteResponse],
    responses={
        404: {"description": "No query given, or no note matched (empty array)"},
        400: {"description": "Invalid search pattern", "model": ErrorResponse},
    },
    summary="Find notes by tag",
    description=(
        "Returns every note with at least one tag equal to `q`, ignoring case. "
        "The whole tag must match; `blue` does not match `blueish`."
    ),
)
async def search_notes(
    request: Request,
    q: Optional[str] = Query(default=None, description="Tag to search for"),
    service: NoteService = Depends(get_note_service),
):
    """
    Search notes by tag.

    A missing query and a query without matches produce the same response,
    404 with an empty array, so existing clients can treat both as
    "nothing found".
    """
    results = service.search_notes(q)
    request.state.search_hits = None if results is None else len(results)
    if not results:
        return JSONResponse(status_code=404, content=[])
    return [_to_response(note) for note in results]


# ── Tags ──────────────────────────────────────────────────────────────────


@router.get(
    "/tags/{note_id}",
    response_model=List[str],
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a note's tags",
)
async def get_tags(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> List[str]:
    return service.get_tags(note_id)


@router.post(
    "/tags/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Body is not an array (plain text)"},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Add tags to a note",
    openapi_extra=TAGS_BODY_OPENAPI,
)
async def add_tags(
    note_id: int,
    tags: Any = Depends(read_tags_payload),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return _to_response(service.add_tags(note_id, tags))


@router.delete(
    "/tags/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Body is not an array (plain text)"},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Remove tags from a note",
    openapi_extra=TAGS_BODY_OPENAPI,
)
async def remove_tags(
    note_id: int,
    tags: Any = Depends(read_tags_payload),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return _to_response(service.remove_tags(note_id, tags))


# ── Single note ───────────────────────────────────────────────────────────


@router.get(
    "/{note_id}",
    response_model=Optional[NoteResponse],
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> Optional[NoteResponse]:
    """
    Get a single note.

    With STRICT_NOT_FOUND disabled an unknown id yields 200 with a null
    body instead of 404.
    """
    if not settings.strict_not_found:
        note = service.find_note(note_id)
        return _to_response(note) if note is not None else None
    return _to_response(service.get_note(note_id))


@router.post(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Update a note",
    description=(
        "Replaces title and body with the values sent; a field left out is "
        "cleared. Adds an edit history entry when `edited_by` is sent."
    ),
)
async def update_note(
    note_id: int,
    payload: Optional[NoteUpdateRequest] = None,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    payload = payload or NoteUpdateRequest()
    note = service.update_note(
        note_id,
        title=payload.title,
        body=payload.body,
        edited_by=payload.edited_by,
    )
    return _to_response(note)


@router.delete(
    "/{note_id}",
    response_model=bool,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> bool:
    return service.delete_note(note_id)
