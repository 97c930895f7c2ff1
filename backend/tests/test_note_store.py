"""
NoteKeeper Backend - Note Store Unit Tests
===========================================

What:  Tests for NoteStore identifier allocation, CRUD and edit history.
How:   Uses the deterministic `clock` fixture; no HTTP involved.
"""

import dataclasses

import pytest

from notekeeper.models.note import EditRecord, Note
from notekeeper.store import NoteStore


class TestNoteStoreCreate:
    """Tests for create() and identifier allocation."""

    def test_first_id_is_one(self, store):
        note = store.create(title="t", body="b", created_by="alice")
        assert note.id == 1

    def test_ids_strictly_increase(self, store):
        ids = [store.create().id for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_id_follows_highest_existing_id(self, store, clock):
        store.add(Note(id=7, title=None, body=None, created_by="x", created_at=clock()))
        assert store.create().id == 8

    def test_highest_id_is_reused_after_delete(self, store):
        store.create()
        second = store.create()
        store.remove(second.id)
        assert store.create().id == second.id

    def test_new_note_fields(self, store, clock):
        note = store.create(title="Groceries", body="milk", created_by="alice")

        assert note.title == "Groceries"
        assert note.body == "milk"
        assert note.created_by == "alice"
        assert note.tags == []
        assert note.edit_history == []
        # Clock advanced once for created_at, then once for this call
        assert note.created_at == clock() - 1

    def test_create_without_fields(self, store):
        note = store.create()
        assert note.title is None
        assert note.body is None
        assert note.created_by is None


class TestNoteStoreRead:
    """Tests for get() and list()."""

    def test_get_returns_created_note(self, store):
        created = store.create(title="a", body="b", created_by="c")
        fetched = store.get(created.id)

        assert fetched is created
        assert fetched.tags == []
        assert fetched.edit_history == []

    def test_get_missing_returns_none(self, store):
        assert store.get(42) is None

    def test_get_does_not_coerce_ids(self, store):
        store.create()
        assert store.get("1") is None

    @pytest.mark.parametrize("note_id", [True, 1.0])
    def test_bool_and_float_ids_never_match(self, store, note_id):
        note = store.create()
        assert store.get(note_id) is None
        assert store.update(note_id, title="x") is None
        assert store.remove(note_id) is False
        assert store.apply_tags(note_id, lambda tags: ["x"]) is None
        assert note_id not in store
        assert store.get(1) is note
        assert note.title is None
        assert note.tags == []

    def test_list_preserves_insertion_order(self, store):
        notes = [store.create(title=str(i)) for i in range(3)]
        assert store.list() == notes

    def test_list_is_a_snapshot(self, store):
        store.create()
        snapshot = store.list()
        store.create()
        assert len(snapshot) == 1
        assert len(store) == 2

    def test_list_empty(self, store):
        assert store.list() == []


class TestNoteStoreUpdate:
    """Tests for update() overwrite semantics and edit history."""

    def test_update_without_editor_keeps_history(self, store):
        note = store.create(title="old", body="old body")
        store.update(note.id, title="new", body="new body")

        assert note.title == "new"
        assert note.body == "new body"
        assert note.edit_history == []

    def test_update_with_editor_appends_one_record(self, store):
        note = store.create(title="old")
        store.update(note.id, title="new", edited_by="bob")
        store.update(note.id, title="newer", edited_by="carol")

        assert [r.edited_by for r in note.edit_history] == ["bob", "carol"]
        assert note.edit_history[0].edited_at < note.edit_history[1].edited_at

    def test_update_with_empty_editor_appends_nothing(self, store):
        note = store.create()
        store.update(note.id, title="x", edited_by="")
        assert note.edit_history == []

    def test_omitted_fields_are_cleared(self, store):
        note = store.create(title="keep me?", body="and me?")
        store.update(note.id, title="only title")

        assert note.title == "only title"
        assert note.body is None

    def test_update_keeps_immutable_fields(self, store):
        note = store.create(title="t", created_by="alice")
        created_at = note.created_at
        store.update(note.id, title="u", edited_by="bob")

        assert note.id == 1
        assert note.created_by == "alice"
        assert note.created_at == created_at

    def test_update_missing_returns_none(self, store):
        assert store.update(99, title="x", edited_by="bob") is None

    def test_edit_records_are_frozen(self, store):
        note = store.create()
        store.update(note.id, edited_by="bob")
        with pytest.raises(dataclasses.FrozenInstanceError):
            note.edit_history[0].edited_by = "mallory"


class TestNoteStoreRemove:
    """Tests for remove()."""

    def test_remove_existing(self, store):
        note = store.create()
        assert store.remove(note.id) is True
        assert store.get(note.id) is None

    def test_remove_missing_is_idempotent(self, store):
        assert store.remove(5) is False
        assert store.remove(5) is False

    def test_remove_twice(self, store):
        note = store.create()
        assert store.remove(note.id) is True
        assert store.remove(note.id) is False


class TestNoteStoreApplyTags:
    """Tests for apply_tags()."""

    def test_replaces_tags_with_result(self, store):
        note = store.create()
        returned = store.apply_tags(note.id, lambda tags: tags + ["blue"])
        assert returned is note
        assert note.tags == ["blue"]

    def test_change_receives_a_copy(self, store):
        note = store.create()
        store.apply_tags(note.id, lambda tags: ["a"])
        seen = []

        def change(tags):
            seen.append(tags)
            tags.append("mutated")
            return ["b"]

        store.apply_tags(note.id, change)
        assert seen[0] is not note.tags
        assert note.tags == ["b"]

    def test_missing_note_skips_change(self, store):
        calls = []
        assert store.apply_tags(3, lambda tags: calls.append(tags) or tags) is None
        assert calls == []

    def test_failing_change_leaves_tags(self, store):
        note = store.create()
        store.apply_tags(note.id, lambda tags: ["keep"])

        def change(tags):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.apply_tags(note.id, change)
        assert note.tags == ["keep"]


class TestNoteStoreAdd:
    """Tests for add(), used when loading sample notes."""

    def test_add_rejects_duplicate_id(self, store):
        store.create()
        with pytest.raises(ValueError, match="already exists"):
            store.add(Note(id=1, title=None, body=None, created_by=None, created_at=0))

    def test_add_rejects_non_positive_id(self, store):
        with pytest.raises(ValueError, match=">= 1"):
            store.add(Note(id=0, title=None, body=None, created_by=None, created_at=0))

    def test_seeded_store_contents(self, seeded_store):
        notes = seeded_store.list()
        assert [n.id for n in notes] == [1, 2, 3]
        assert notes[0].tags == []
        assert notes[1].tags == ["orange", "blue", "yellow"]
        assert notes[2].tags == ["red", "blue", "green"]
        assert notes[1].edit_history == [EditRecord(edited_by="A User", edited_at=1631767852081)]
        assert seeded_store.create().id == 4

    def test_default_clock_is_epoch_milliseconds(self):
        note = NoteStore().create()
        # Any time after 2020-01-01 expressed in ms
        assert note.created_at > 1_577_836_800_000
