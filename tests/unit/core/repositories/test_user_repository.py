"""UserRepository against an in-memory SQLite database."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from technotes.core.repositories.note_repository import NoteRepository
from technotes.core.repositories.user_repository import UserRepository


@pytest.fixture
def repo(db_session):
    return UserRepository(db_session)


async def make_user(repo, username):
    return await repo.create_user({"username": username, "password": "hash"})


async def test_create_defaults(repo):
    user = await make_user(repo, "alice")
    assert user.roles == ["Employee"]
    assert user.active is True
    assert await repo.get_by_username("alice") is not None


async def test_unique_index_backs_precheck(repo):
    await make_user(repo, "alice")
    with pytest.raises(IntegrityError):
        await make_user(repo, "alice")

    # the session was rolled back and is usable again
    assert [u.username for u in await repo.list_users()] == ["alice"]


async def test_username_conflict_lookup(repo):
    alice = await make_user(repo, "alice")
    bob = await make_user(repo, "bob")

    user, duplicate = await repo.get_with_username_conflict(bob.id, "alice")
    assert user.id == bob.id
    assert duplicate.id == alice.id

    user, duplicate = await repo.get_with_username_conflict(alice.id, "alice")
    assert user.id == alice.id
    assert duplicate is None

    user, duplicate = await repo.get_with_username_conflict(uuid.uuid4(), "carol")
    assert user is None and duplicate is None


async def test_note_flag(repo, db_session):
    alice = await make_user(repo, "alice")
    bob = await make_user(repo, "bob")
    await NoteRepository(db_session).create_note({"user_id": alice.id, "title": "T", "text": "x"})

    user, has_notes = await repo.get_with_note_flag(alice.id)
    assert user.id == alice.id and has_notes is True

    user, has_notes = await repo.get_with_note_flag(bob.id)
    assert user.id == bob.id and has_notes is False

    assert await repo.get_with_note_flag(uuid.uuid4()) == (None, False)


async def test_foreign_key_restricts_delete(repo, db_session):
    alice = await make_user(repo, "alice")
    await NoteRepository(db_session).create_note({"user_id": alice.id, "title": "T", "text": "x"})

    with pytest.raises(IntegrityError):
        await repo.delete_user(alice)


async def test_update_and_delete(repo):
    alice = await make_user(repo, "alice")
    await repo.update_user(alice, {"username": "alicia", "roles": ["Admin"], "active": False})

    fetched = await repo.get_by_id(alice.id)
    assert fetched.username == "alicia"
    assert fetched.roles == ["Admin"]

    await repo.delete_user(fetched)
    assert await repo.get_by_id(alice.id) is None
