"""Unit tests for NoteService with fake repositories."""

import uuid
from datetime import datetime, timezone

import pytest

from technotes.core.exceptions import ConflictError, NotFoundError, ValidationError
from technotes.core.schemas.notes import NoteCreateRequest, NoteUpdateRequest
from technotes.core.services import note_service
from technotes.core.services.note_service import NoteService


class DummyNote:
    def __init__(self, **kwargs):
        now = datetime.now(timezone.utc)
        self.id = kwargs.pop("id", uuid.uuid4())
        self.completed = kwargs.pop("completed", False)
        self.created_at = now
        self.updated_at = now
        self.__dict__.update(kwargs)


class FakeNoteRepo:
    def __init__(self, notes=()):
        self.notes = {n.id: n for n in notes}
        self.created = []

    async def list_with_usernames(self, user_id=None):
        return [
            (n, "alice") for n in self.notes.values() if user_id is None or n.user_id == user_id
        ]

    async def get_with_username(self, note_id):
        note = self.notes.get(note_id)
        return (note, "alice") if note else None

    async def get_by_id(self, note_id):
        return self.notes.get(note_id)

    async def get_by_title(self, title):
        return next((n for n in self.notes.values() if n.title == title), None)

    async def get_with_title_conflict(self, note_id, title):
        note = self.notes.get(note_id)
        dup = next((n for n in self.notes.values() if n.title == title and n.id != note_id), None)
        return note, dup

    async def create_note(self, data):
        note = DummyNote(ticket=500 + len(self.notes), **data)
        self.notes[note.id] = note
        self.created.append(data)
        return note

    async def update_note(self, note, data):
        for key, value in data.items():
            setattr(note, key, value)
        return note

    async def delete_note(self, note):
        del self.notes[note.id]


class FakeUserRepo:
    def __init__(self, user_ids=()):
        self.user_ids = set(user_ids)

    async def get_by_id(self, user_id):
        return object() if user_id in self.user_ids else None


def make_service(monkeypatch, notes=(), user_ids=()):
    note_repo = FakeNoteRepo(notes)
    monkeypatch.setattr(note_service, "NoteRepository", lambda s: note_repo)
    monkeypatch.setattr(note_service, "UserRepository", lambda s: FakeUserRepo(user_ids))
    return NoteService(session=None), note_repo


async def test_list_empty(monkeypatch):
    svc, _ = make_service(monkeypatch)
    with pytest.raises(NotFoundError) as exc:
        await svc.get_all_notes()
    assert exc.value.message == "No notes found"


async def test_list_carries_username(monkeypatch):
    owner = uuid.uuid4()
    note = DummyNote(user_id=owner, title="T", text="x", ticket=500)
    svc, _ = make_service(monkeypatch, notes=[note])

    [res] = await svc.get_all_notes(owner)
    assert res.username == "alice"
    assert res.user == owner
    assert res.ticket == 500


async def test_create(monkeypatch):
    owner = uuid.uuid4()
    svc, repo = make_service(monkeypatch, user_ids=[owner])

    res = await svc.create_new_note(NoteCreateRequest(user=owner, title="T", text="x"))
    assert res.message == "New note created"
    assert repo.created == [{"user_id": owner, "title": "T", "text": "x"}]


async def test_create_missing_fields(monkeypatch):
    svc, _ = make_service(monkeypatch)
    with pytest.raises(ValidationError) as exc:
        await svc.create_new_note(NoteCreateRequest(title="T", text="x"))
    assert exc.value.message == "All fields are required"


async def test_create_unknown_user(monkeypatch):
    svc, _ = make_service(monkeypatch)
    with pytest.raises(NotFoundError) as exc:
        await svc.create_new_note(NoteCreateRequest(user=uuid.uuid4(), title="T", text="x"))
    assert exc.value.message == "User not found"


async def test_create_duplicate_title(monkeypatch):
    owner = uuid.uuid4()
    existing = DummyNote(user_id=owner, title="T", text="x", ticket=500)
    svc, _ = make_service(monkeypatch, notes=[existing], user_ids=[owner])
    with pytest.raises(ConflictError):
        await svc.create_new_note(NoteCreateRequest(user=owner, title="T", text="y"))


async def test_update_keeps_own_title(monkeypatch):
    owner = uuid.uuid4()
    note = DummyNote(user_id=owner, title="T", text="x", ticket=500)
    svc, _ = make_service(monkeypatch, notes=[note], user_ids=[owner])

    res = await svc.update_note(
        note.id, NoteUpdateRequest(user=owner, title="T", text="y", completed=True)
    )
    assert res.message == "'T' updated"
    assert note.completed is True


async def test_update_requires_completed(monkeypatch):
    svc, _ = make_service(monkeypatch)
    with pytest.raises(ValidationError):
        await svc.update_note(uuid.uuid4(), NoteUpdateRequest(user=uuid.uuid4(), title="T", text="x"))


async def test_update_unknown_note(monkeypatch):
    svc, _ = make_service(monkeypatch)
    with pytest.raises(NotFoundError) as exc:
        await svc.update_note(
            uuid.uuid4(), NoteUpdateRequest(user=uuid.uuid4(), title="T", text="x", completed=False)
        )
    assert exc.value.message == "Note not found"


async def test_delete(monkeypatch):
    note = DummyNote(user_id=uuid.uuid4(), title="Old", text="x", ticket=500)
    svc, repo = make_service(monkeypatch, notes=[note])

    res = await svc.delete_note(note.id)
    assert res.message == f"Note 'Old' with ID {note.id} deleted"
    assert repo.notes == {}
