"""
NoteKeeper Backend - Note Domain Model
=======================================

What:  In-memory representation of a note and its edit records.
How:   Plain dataclasses owned exclusively by NoteStore. API schemas in
       notekeeper.schemas.note are built from these via ``from_attributes``.

Field Notes:
    id, created_by, created_at: assigned once by NoteStore.create()
    tags:          insertion ordered, no two entries equal as strings
    edit_history:  append-only; EditRecord is frozen so entries never change
    timestamps:    integer milliseconds since the Unix epoch
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class EditRecord:
    """Who edited a note and when."""

    edited_by: str
    edited_at: int


@dataclass
class Note:
    id: int
    title: Optional[str]
    body: Optional[str]
    created_by: Optional[str]
    created_at: int
    tags: List[str] = field(default_factory=list)
    edit_history: List[EditRecord] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, tags={self.tags})>"
