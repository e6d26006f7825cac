"""Shared fixtures: every store-backed test runs on both stores."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.db.memory import MemoryStore
from taskboard.db.sql import SQLStore
from taskboard.main import create_app
from taskboard.services.auth import AuthService
from taskboard.services.credentials import CredentialStore
from taskboard.services.tasks import TaskService

TEST_SECRET = "test-secret"
TEST_ROUNDS = 4


def _database_url(kind: str, tmp_path) -> str:
    if kind == "memory":
        return "memory://"
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def store(request, tmp_path):
    """A connected store, memory or SQLite."""
    if request.param == "memory":
        backend = MemoryStore()
    else:
        backend = SQLStore(_database_url("sqlite", tmp_path))
    await backend.connect()
    yield backend
    await backend.close()


@pytest.fixture
def credentials(store):
    return CredentialStore(store, rounds=TEST_ROUNDS)


@pytest.fixture
def auth_service(credentials):
    return AuthService(credentials, TEST_SECRET, expire_minutes=60)


@pytest.fixture
def task_service(store):
    return TaskService(store)


@pytest.fixture(params=["memory", "sqlite"])
def settings(request, tmp_path):
    return Settings(
        database_url=_database_url(request.param, tmp_path),
        auth_secret=TEST_SECRET,
        bcrypt_rounds=TEST_ROUNDS,
    )


@pytest.fixture
def client(settings):
    """TestClient with the lifespan running, so the store is connected."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return (user_id, token)."""
    def _register(username: str = "alice", password: str = "s3cret"):
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 201
        token = response.json()["access_token"]
        user_id = client.app.state.auth_service.verify_token(token)
        return user_id, token
    return _register


@pytest.fixture
def token_service():
    """AuthService for token-only tests; its store is never touched."""
    return AuthService(CredentialStore(MemoryStore(), rounds=TEST_ROUNDS), TEST_SECRET)
