"""
NoteKeeper Backend - Note Service (Business Logic Orchestrator)
================================================================

What:  Coordinates the note store and the tag matcher for the HTTP routes.
How:   Wraps a NoteStore handed in at construction. Store absences (None)
       become NotFoundError; tag payload and search errors propagate from
       tag_service unchanged.
Who:   Built once by main.create_app(), stored on app.state and injected
       into route handlers with get_note_service().

Request Flow:
    Route ──▶ NoteService ──▶ NoteStore         (create/get/update/remove)
                         └──▶ tag_service       (add/remove/search tags)
"""

import logging
from typing import Any, List, Optional

from fastapi import Request

from notekeeper.exceptions import NotFoundError
from notekeeper.models.note import Note
from notekeeper.services import tag_service
from notekeeper.store import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create/list/get/update/delete notes
        - read, add and remove a note's tags
        - tag search across all notes

    Args:
        store: The note repository this service operates on.
        search_mode: "exact" or "pattern", see tag_service.
    """

    def __init__(self, store: NoteStore, search_mode: str = "exact"):
        if search_mode not in tag_service.SEARCH_MODES:
            raise ValueError(
                f"Invalid search_mode '{search_mode}'. "
                f"Must be one of: {tag_service.SEARCH_MODES}"
            )
        self.store = store
        self.search_mode = search_mode

    def _require(self, note_id: int) -> Note:
        note = self.store.get(note_id)
        if note is None:
            logger.debug("Note %s not found", note_id)
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    # ── Notes ─────────────────────────────────────────────────────────────

    def create_note(
        self,
        title: Optional[str] = None,
        body: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> Note:
        note = self.store.create(title=title, body=body, created_by=created_by)
        logger.info("Note %d created by %s", note.id, created_by)
        return note

    def list_notes(self) -> List[Note]:
        return self.store.list()

    def find_note(self, note_id: int) -> Optional[Note]:
        """Lookup that reports absence as None instead of raising."""
        return self.store.get(note_id)

    def get_note(self, note_id: int) -> Note:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        return self._require(note_id)

    def update_note(
        self,
        note_id: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
        edited_by: Optional[str] = None,
    ) -> Note:
        """
        Overwrite a note's title and body.

        Fields that are not supplied are cleared, matching NoteStore.update().
        An edit record is appended only when ``edited_by`` is given.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
        """
        note = self.store.update(
            note_id, title=title, body=body, edited_by=edited_by
        )
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info(
            "Note %d updated (edited_by=%s, history=%d)",
            note.id, edited_by, len(note.edit_history),
        )
        return note

    def delete_note(self, note_id: int) -> bool:
        removed = self.store.remove(note_id)
        if removed:
            logger.info("Note %d deleted", note_id)
        return removed

    # ── Tags ──────────────────────────────────────────────────────────────

    def get_tags(self, note_id: int) -> List[str]:
        return list(self._require(note_id).tags or [])

    def add_tags(self, note_id: int, tags: Any) -> Note:
        """
        Attach tags to a note.

        The note lookup happens before the payload is validated, so a missing
        note is reported as 404 even when the body is malformed.

        Raises:
            NotFoundError: Note does not exist (→ 404)
            InvalidInputError: ``tags`` is not a list (→ 400)
        """
        note = self.store.apply_tags(
            note_id, lambda current: tag_service.add_tags(current, tags)
        )
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %d tagged, now %d tag(s)", note_id, len(note.tags))
        return note

    def remove_tags(self, note_id: int, tags: Any) -> Note:
        """
        Detach tags from a note by exact value.

        Raises:
            NotFoundError: Note does not exist (→ 404)
            InvalidInputError: ``tags`` is not a list (→ 400)
        """
        note = self.store.apply_tags(
            note_id, lambda current: tag_service.remove_tags(current, tags)
        )
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %d untagged, now %d tag(s)", note_id, len(note.tags))
        return note

    def search_notes(self, query: Optional[str]) -> Optional[List[Note]]:
        """
        Search notes by tag.

        Returns:
            None if no query was given, otherwise the list of matches.

        Raises:
            SearchPatternError: invalid pattern in "pattern" search mode (→ 400)
        """
        results = tag_service.search(self.store.list(), query, self.search_mode)
        if results is None:
            logger.debug("Search skipped: empty query")
        else:
            logger.debug("Search %r matched %d note(s)", query, len(results))
        return results


def get_note_service(request: Request) -> NoteService:
    """
    FastAPI dependency returning the application's NoteService.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(service: NoteService = Depends(get_note_service)):
            return service.list_notes()
    """
    return request.app.state.note_service
