"""
NoteKeeper Backend - In-Memory Note Store
==========================================

What:  The note repository: owns every Note, assigns identifiers, applies
       create/update/delete mutations and maintains edit history.
How:   A dict keyed by note id (insertion ordered, O(1) lookup) guarded by a
       single lock. Absence is reported as ``None`` / ``False``, never raised.
Who:   Constructed once by main.create_app() and reached by route handlers
       through the get_note_service() dependency.
When:  Lives as long as the application object; nothing is persisted.

Identifier Allocation:
    next id = max(existing ids) + 1, with an empty store counting as 0.
    Deleting the highest note therefore frees its id for the next create.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from notekeeper.models.note import EditRecord, Note, now_ms

logger = logging.getLogger(__name__)


def _is_note_id(value: object) -> bool:
    # bool is an int subclass and 1.0 hashes like 1; neither is an id
    return type(value) is int


class NoteStore:
    """
    Process-local collection of notes.

    Args:
        clock: Returns the current time in epoch milliseconds. Tests pass a
               fixed clock to get deterministic created_at/edited_at values.
    """

    def __init__(self, clock: Callable[[], int] = now_ms):
        self._notes: Dict[int, Note] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return _is_note_id(note_id) and note_id in self._notes

    def now(self) -> int:
        """Current time according to the store clock."""
        return self._clock()

    def _next_id(self) -> int:
        return max(self._notes, default=0) + 1

    def create(
        self,
        title: Optional[str] = None,
        body: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Note:
        """Create a note with the next free id. Never fails."""
        with self._lock:
            note = Note(
                id=self._next_id(),
                title=title,
                body=body,
                created_by=created_by,
                created_at=self._clock(),
            )
            self._notes[note.id] = note
        logger.debug("Stored note %d", note.id)
        return note

    def add(self, note: Note) -> Note:
        """
        Insert a fully built note under its own id.

        Used for loading sample data. Raises ValueError if the id is not a
        positive integer or is already taken.
        """
        if note.id < 1:
            raise ValueError(f"Note id must be >= 1, got {note.id}")
        with self._lock:
            if note.id in self._notes:
                raise ValueError(f"Note id {note.id} already exists")
            self._notes[note.id] = note
        return note

    def list(self) -> List[Note]:
        """All notes in insertion order. The list is a snapshot."""
        with self._lock:
            return list(self._notes.values())

    def get(self, note_id: int) -> Optional[Note]:
        """Exact lookup. Values that are not plain ints never match."""
        if not _is_note_id(note_id):
            return None
        return self._notes.get(note_id)

    def update(
        self,
        note_id: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
        edited_by: Optional[str] = None,
    ) -> Optional[Note]:
        """
        Overwrite title and body of a note, optionally recording the edit.

        Title and body are always replaced, so a field left out of the update
        is cleared to None. An edit record is appended only when edited_by is
        a non-empty string.

        Returns:
            The updated note, or None if note_id is not in the store.
        """
        if not _is_note_id(note_id):
            return None
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return None

            note.title = title
            note.body = body

            if edited_by:
                note.edit_history.append(
                    EditRecord(edited_by=edited_by, edited_at=self._clock())
                )
        return note

    def apply_tags(
        self,
        note_id: int,
        change: Callable[[List[str]], List[str]],
    ) -> Optional[Note]:
        """
        Replace a note's tags with ``change(current_tags)``.

        Read, change and write happen under the store lock, so concurrent tag
        edits on one note are applied one after the other. Exceptions raised
        by ``change`` propagate and leave the tags untouched.

        Returns:
            The note, or None if note_id is not in the store (``change`` is
            not called then).
        """
        if not _is_note_id(note_id):
            return None
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                return None
            note.tags = list(change(list(note.tags or [])))
        return note

    def remove(self, note_id: int) -> bool:
        """Delete a note. Returns whether anything was deleted."""
        if not _is_note_id(note_id):
            return False
        with self._lock:
            return self._notes.pop(note_id, None) is not None
