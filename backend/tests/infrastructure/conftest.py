"""Store fixtures: one initialized TaskStore per test on a tmp SQLite file."""

import pytest

from todo_api.infrastructure.task_store import TaskStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture
async def store(database_url):
    store = TaskStore(database_url)
    await store.initialize()
    yield store
    await store.close()
