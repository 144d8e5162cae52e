"""API test fixtures: file-backed SQLite store + FastAPI test client.

Invariants:
    - Every test gets a fresh database file under tmp_path
    - get_task_store dependency overridden to return the test store
"""

import pytest
from httpx import ASGITransport, AsyncClient

from todo_api.infrastructure.task_store import TaskStore, get_task_store
from todo_api.main import app


@pytest.fixture
async def store(tmp_path):
    store = TaskStore(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_task_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
