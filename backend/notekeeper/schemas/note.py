"""
NoteKeeper Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the notes endpoints.
How:   FastAPI validates request bodies against the *Request models and
       serializes domain objects (notekeeper.models.note) through the
       *Response models via ``from_attributes``.

Wire format:
    {
        "id": 2,
        "title": "Test Note 2",
        "body": "...",
        "created_by": "admin",
        "created_at": 1631767852081,
        "tags": ["orange", "blue", "yellow"],
        "edit_history": [{"edited_by": "A User", "edited_at": 1631767852081}]
    }
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(BaseModel):
    """Body of POST /notes. Every field may be omitted."""
    title: Optional[str] = Field(default=None, description="Note title")
    body: Optional[str] = Field(default=None, description="Note text")
    created_by: Optional[str] = Field(default=None, description="Author name")


class NoteUpdateRequest(BaseModel):
    """
    Body of POST /notes/{id}.

    title and body overwrite the stored values, so omitting one clears it.
    edited_by, when present and non-empty, appends an edit history entry.
    """
    title: Optional[str] = Field(default=None, description="Replacement title")
    body: Optional[str] = Field(default=None, description="Replacement text")
    edited_by: Optional[str] = Field(default=None, description="Editor name")


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns
# ══════════════════════════════════════════════════════════════════════════


class EditRecordResponse(BaseModel):
    edited_by: str = Field(description="Who made the edit")
    edited_at: int = Field(description="Edit time, ms since epoch")

    model_config = {"from_attributes": True}


class NoteResponse(BaseModel):
    """Full representation of a note."""
    id: int = Field(description="Unique note identifier (>= 1)")
    title: Optional[str] = Field(default=None)
    body: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None)
    created_at: int = Field(description="Creation time, ms since epoch")
    tags: List[str] = Field(default_factory=list, description="Tags in insertion order")
    edit_history: List[EditRecordResponse] = Field(
        default_factory=list,
        description="Append-only list of edits, oldest first",
    )

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized JSON error body.

    Fields:
        error: Machine-readable error code (e.g., "not_found")
        message: Human-readable description
        details: Optional extra context
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    note_count: int = Field(description="Number of notes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
