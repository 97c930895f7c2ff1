"""
NoteKeeper Backend - Sample Notes
==================================

What:  The three notes a fresh service can start with.
When:  Loaded by main.create_app() when SEED_SAMPLE_NOTES is enabled, and
       by the test suite for scenario tests.
"""

import logging
from typing import List

from notekeeper.models.note import EditRecord, Note
from notekeeper.store import NoteStore

logger = logging.getLogger(__name__)

SAMPLE_TIMESTAMP = 1631767852081


def sample_notes(created_at: int) -> List[Note]:
    """Build fresh sample notes. Note 1 is stamped with ``created_at``."""
    return [
        Note(
            id=1,
            title="Test Note",
            body="This is a test note object that will be available by default",
            created_by="admin",
            created_at=created_at,
            edit_history=[EditRecord(edited_by="A User", edited_at=created_at)],
        ),
        Note(
            id=2,
            title="Test Note 2",
            body="This is a second test note object that will be available by default",
            created_by="admin",
            created_at=SAMPLE_TIMESTAMP,
            tags=["orange", "blue", "yellow"],
            edit_history=[EditRecord(edited_by="A User", edited_at=SAMPLE_TIMESTAMP)],
        ),
        Note(
            id=3,
            title="Test Note 3",
            body="This is a third test note object that will be available by default",
            created_by="admin",
            created_at=SAMPLE_TIMESTAMP,
            tags=["red", "blue", "green"],
            edit_history=[EditRecord(edited_by="A User", edited_at=SAMPLE_TIMESTAMP)],
        ),
    ]


def seed_sample_notes(store: NoteStore) -> NoteStore:
    """Add the sample notes to ``store``. The store must not hold ids 1-3."""
    for note in sample_notes(store.now()):
        store.add(note)
    logger.info("Seeded %d sample notes", len(store))
    return store
