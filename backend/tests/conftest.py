"""Pytest fixtures: fresh in-memory and SQLite-backed stores for each test."""
import asyncio
import os

# Must be set before songbooth.config is imported
os.environ["STORAGE_BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from songbooth import functions
from songbooth.deps import get_store
from songbooth.main import app
from songbooth.storage.db_store import DatabaseRequestStore
from songbooth.storage.memory_store import MemoryRequestStore


def run(coro):
    """Drive a store/service coroutine from a plain test."""
    return asyncio.run(coro)


@pytest.fixture(scope="function")
def memory_store():
    return MemoryRequestStore()


@pytest.fixture(scope="function")
def db_store(tmp_path):
    """SQLite file store; tables are created by the store itself."""
    store = DatabaseRequestStore(f"sqlite:///{tmp_path / 'songbooth.db'}")
    yield store
    run(store.close())


@pytest.fixture(scope="function", params=["memory", "database"])
def store(request, tmp_path):
    """Both store implementations, for contract tests."""
    if request.param == "memory":
        yield MemoryRequestStore()
        return
    db = DatabaseRequestStore(f"sqlite:///{tmp_path / 'contract.db'}")
    yield db
    run(db.close())


def _client_for(store):
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


@pytest.fixture(scope="function")
def client(memory_store):
    """FastAPI TestClient with the store dependency pointed at an in-memory store."""
    with _client_for(memory_store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db_client(db_store):
    """FastAPI TestClient over the SQLite-backed store."""
    with _client_for(db_store) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def function_store(memory_store):
    """Point the serverless handler at an in-memory store for one test."""
    functions.set_store(memory_store)
    yield memory_store
    functions.set_store(None)


# ---------------------------------------------------------------------------
# Helper: create a request via the API, returns the JSON response dict
# ---------------------------------------------------------------------------
def create_test_request(client: TestClient, artist: str = "Daft Punk", title: str = "One More Time") -> dict:
    """Helper: POST /api/requests and return response JSON."""
    resp = client.post("/api/requests", json={"artist": artist, "title": title})
    assert resp.status_code == 201, resp.text
    return resp.json()
