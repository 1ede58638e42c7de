"""Unit tests for the SQL built by the generic resource repository."""

from unittest.mock import AsyncMock

import pytest

from core import db
from resources import repository
from resources.descriptors import BANNERS, SONGS


@pytest.fixture
def fetch_one(monkeypatch):
    mock = AsyncMock(return_value={"id": "abc"})
    monkeypatch.setattr(db, "fetch_one", mock)
    return mock


@pytest.mark.asyncio
async def test_insert_binds_every_field_in_order(fetch_one, monkeypatch):
    monkeypatch.setattr(repository, "new_resource_id", lambda: "new-id")

    await repository.insert(SONGS, {"title": "T", "file": "f.mp3"})

    sql, *params = fetch_one.await_args.args
    assert "INSERT INTO songs (id, title, artist, category, file)" in sql
    assert params == ["new-id", "T", None, None, "f.mp3"]


@pytest.mark.asyncio
async def test_update_only_sets_supplied_fields(fetch_one):
    await repository.update_by_id(SONGS, "abc", {"category": "Jazz", "title": "T"})

    sql, *params = fetch_one.await_args.args
    assert "SET title = $2, category = $3" in sql
    assert "artist" not in sql.split("RETURNING")[0]
    assert params == ["abc", "T", "Jazz"]


@pytest.mark.asyncio
async def test_empty_update_is_a_plain_read(fetch_one):
    await repository.update_by_id(BANNERS, "abc", {})

    sql = fetch_one.await_args.args[0]
    assert "UPDATE" not in sql
    assert "FROM banners" in sql


@pytest.mark.asyncio
async def test_unknown_field_is_refused(fetch_one):
    with pytest.raises(ValueError):
        await repository.update_by_id(BANNERS, "abc", {"artist": "nope"})

    fetch_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_reports_missing_row(monkeypatch):
    monkeypatch.setattr(db, "fetch_one", AsyncMock(return_value=None))

    assert await repository.delete_by_id(SONGS, "missing") is False
