"""Unit tests for the seed loader (database calls mocked)."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from auth import repository as auth_repository
from auth import security
from core import db, schema
from resources import repository as resources_repository
from resources.descriptors import SONGS
from seeding import data, loader


def test_sample_data_shape():
    users = data.sample_users()
    songs = data.sample_songs()

    assert len(users) == 20
    assert users[0] == {"username": "user1", "email": "user1@example.com", "password": "password1"}
    assert len(songs) == 20
    assert songs[19] == {"title": "Song 20", "artist": "Artist 20", "category": "Category 20", "file": "song20.mp3"}


def test_hashed_users_never_keep_plaintext(monkeypatch):
    monkeypatch.setattr(security, "hash_password", lambda p: f"hashed:{p}")

    users = loader.hashed_users()

    assert all("password" not in u for u in users)
    assert users[0]["password_hash"] == "hashed:password1"


@pytest.fixture
def seed_env(monkeypatch):
    conn = MagicMock(name="conn")

    @asynccontextmanager
    async def fake_transaction():
        yield conn

    lock = AsyncMock(return_value=True)
    replace_users = AsyncMock(return_value=20)
    replace_songs = AsyncMock(return_value=20)

    monkeypatch.setattr(schema, "apply_schema", AsyncMock())
    monkeypatch.setattr(db, "transaction", fake_transaction)
    monkeypatch.setattr(db, "try_exclusive_serving_lock", lock)
    monkeypatch.setattr(auth_repository, "replace_all_users", replace_users)
    monkeypatch.setattr(resources_repository, "replace_all", replace_songs)
    monkeypatch.setattr(security, "hash_password", lambda p: f"hashed:{p}")

    return {"conn": conn, "lock": lock, "users": replace_users, "songs": replace_songs}


@pytest.mark.asyncio
async def test_seed_replaces_users_and_songs(seed_env):
    stats = await loader.seed()

    assert stats == loader.SeedStats(users=20, songs=20)
    schema.apply_schema.assert_awaited_once()

    conn, users = seed_env["users"].await_args.args
    assert conn is seed_env["conn"]
    assert len(users) == 20

    conn, resource, songs = seed_env["songs"].await_args.args
    assert resource is SONGS
    assert songs == data.sample_songs()


@pytest.mark.asyncio
async def test_seed_refuses_while_server_holds_lock(seed_env):
    seed_env["lock"].return_value = False

    with pytest.raises(loader.SeedRefusedError):
        await loader.seed()

    seed_env["users"].assert_not_awaited()
    seed_env["songs"].assert_not_awaited()
