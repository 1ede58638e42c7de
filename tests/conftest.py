"""Shared fixtures: in-memory stores in place of PostgreSQL, and an HTTP client."""

import uuid
from typing import Any

import bcrypt
import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from resources import repository as resources_repository
from resources.descriptors import ResourceType
from seeding import data

ALLOWED_ORIGIN = "https://example.com"
TEST_SECRET = "test-signing-secret"


# ---------------------------------------------------------------------------
# Fake repositories (pure in-memory, no Postgres)
# ---------------------------------------------------------------------------

class FakeUserRepository:
    """In-memory stand-in for `auth.repository`."""

    def __init__(self) -> None:
        self.users: list[dict[str, Any]] = []

    def add(self, username: str, password: str, email: str | None = None) -> dict[str, Any]:
        # Low bcrypt cost keeps the suite fast.
        row = {
            "id": str(uuid.uuid4()),
            "username": username,
            "email": email or f"{username}@example.com",
            "password_hash": bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode(),
        }
        self.users.append(row)
        return row

    async def get_user_by_username(self, username: str) -> dict[str, Any] | None:
        for row in self.users:
            if row["username"] == username:
                return dict(row)
        return None


class FakeResourceRepository:
    """In-memory stand-in for `resources.repository`, keyed by resource name."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, dict[str, Any]]] = {}

    def _table(self, resource: ResourceType) -> dict[str, dict[str, Any]]:
        return self.tables.setdefault(resource.name, {})

    def load(self, resource: ResourceType, records: list[dict[str, Any]]) -> None:
        for record in records:
            row = {"id": str(uuid.uuid4())}
            row.update({f: record.get(f) for f in resource.fields})
            self._table(resource)[row["id"]] = row

    async def insert(self, resource: ResourceType, values: dict[str, Any]) -> dict[str, Any]:
        row = {"id": str(uuid.uuid4())}
        row.update({f: values.get(f) for f in resource.fields})
        self._table(resource)[row["id"]] = row
        return dict(row)

    async def list_all(self, resource: ResourceType) -> list[dict[str, Any]]:
        return [dict(row) for row in self._table(resource).values()]

    async def get_by_id(self, resource: ResourceType, resource_id: str) -> dict[str, Any] | None:
        row = self._table(resource).get(resource_id)
        return dict(row) if row is not None else None

    async def update_by_id(
        self, resource: ResourceType, resource_id: str, values: dict[str, Any]
    ) -> dict[str, Any] | None:
        row = self._table(resource).get(resource_id)
        if row is None:
            return None
        row.update(values)
        return dict(row)

    async def delete_by_id(self, resource: ResourceType, resource_id: str) -> bool:
        return self._table(resource).pop(resource_id, None) is not None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _api_env(monkeypatch, tmp_path):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    monkeypatch.delenv("JWT_ALG", raising=False)


@pytest.fixture
def user_repo(monkeypatch) -> FakeUserRepository:
    repo = FakeUserRepository()
    repo.add("user1", "password1")
    repo.add("user2", "password2")
    monkeypatch.setattr(auth_repository, "get_user_by_username", repo.get_user_by_username)
    return repo


@pytest.fixture
def resource_repo(monkeypatch) -> FakeResourceRepository:
    repo = FakeResourceRepository()
    for name in ("insert", "list_all", "get_by_id", "update_by_id", "delete_by_id"):
        monkeypatch.setattr(resources_repository, name, getattr(repo, name))
    return repo


@pytest.fixture
def seeded_resource_repo(resource_repo) -> FakeResourceRepository:
    from resources.descriptors import SONGS

    resource_repo.load(SONGS, data.sample_songs())
    return resource_repo


@pytest.fixture
def client(user_repo, resource_repo) -> TestClient:
    """
    In-process client that sends the allowed Origin on every request.

    Not entered as a context manager, so the lifespan (DB pool) never runs.
    """
    from main import app

    return TestClient(app, headers={"Origin": ALLOWED_ORIGIN})


@pytest.fixture
def token(client) -> str:
    resp = client.post("/login", json={"username": "user1", "password": "password1"})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(token) -> dict[str, str]:
    return {"Authorization": token}
