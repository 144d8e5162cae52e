"""Task Routes: end-to-end HTTP behavior over a real SQLite file.

Tests cover:
    - create/toggle/delete answer 201 with a message body
    - list reflects exactly the surviving tasks and their flags
    - empty title and malformed bodies answer 400 without touching storage
    - toggle/delete of an unknown id still answer 201
    - storage failures answer 500 with the driver message
"""

import logging

from sqlalchemy import text


async def _create(client, title: str):
    return await client.post("/tasks", json={"title": title})


async def _tasks(client) -> list[dict]:
    res = await client.get("/tasks")
    assert res.status_code == 200
    return res.json()


# ─── happy path ─────────────────────────────────────────────────

async def test_list_is_empty_array_initially(client):
    assert await _tasks(client) == []


async def test_full_lifecycle(client):
    res = await _create(client, "buy milk")
    assert res.status_code == 201
    assert res.json() == {"message": "Task added successfully"}
    assert await _tasks(client) == [
        {"id": 1, "title": "buy milk", "completed": False},
    ]

    res = await client.post("/tasks/toggle", json={"id": 1})
    assert res.status_code == 201
    assert res.json() == {"message": "Task toggled successfully"}
    assert await _tasks(client) == [
        {"id": 1, "title": "buy milk", "completed": True},
    ]

    res = await client.post("/tasks/delete", json={"id": 1})
    assert res.status_code == 201
    assert res.json() == {"message": "Task deleted successfully"}
    assert await _tasks(client) == []


async def test_create_grows_list_by_one(client):
    await _create(client, "a")
    before = len(await _tasks(client))
    await _create(client, "b")
    tasks = await _tasks(client)
    assert len(tasks) == before + 1
    assert tasks[-1]["completed"] is False


async def test_toggle_twice_restores(client):
    await _create(client, "buy milk")
    await client.post("/tasks/toggle", json={"id": 1})
    await client.post("/tasks/toggle", json={"id": 1})
    assert (await _tasks(client))[0]["completed"] is False


async def test_mixed_sequence_reflects_survivors(client):
    for title in ("a", "b", "c", "d"):
        await _create(client, title)
    await client.post("/tasks/toggle", json={"id": 1})
    await client.post("/tasks/toggle", json={"id": 3})
    await client.post("/tasks/delete", json={"id": 2})
    await client.post("/tasks/toggle", json={"id": 3})
    assert await _tasks(client) == [
        {"id": 1, "title": "a", "completed": True},
        {"id": 3, "title": "c", "completed": False},
        {"id": 4, "title": "d", "completed": False},
    ]


# ─── unknown ids ────────────────────────────────────────────────

async def test_toggle_unknown_id_still_201(client):
    await _create(client, "buy milk")
    res = await client.post("/tasks/toggle", json={"id": 999})
    assert res.status_code == 201
    assert await _tasks(client) == [
        {"id": 1, "title": "buy milk", "completed": False},
    ]


async def test_delete_unknown_id_still_201(client):
    await _create(client, "buy milk")
    res = await client.post("/tasks/delete", json={"id": 999})
    assert res.status_code == 201
    assert len(await _tasks(client)) == 1


# ─── 400s ───────────────────────────────────────────────────────

async def test_empty_title_rejected(client):
    await _create(client, "keep")
    res = await _create(client, "")
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"] == "Title is required"
    assert len(await _tasks(client)) == 1


async def test_invalid_json_rejected(client):
    res = await client.post(
        "/tasks", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "MALFORMED_REQUEST"
    assert body["message"] == "Invalid JSON"
    assert await _tasks(client) == []


async def test_missing_title_is_empty_title(client):
    for payload in ({}, {"title": None}):
        res = await client.post("/tasks", json=payload)
        assert res.status_code == 400
        body = res.json()["error"]
        assert body["code"] == "VALIDATION_ERROR"
        assert body["message"] == "Title is required"
    assert await _tasks(client) == []


async def test_non_string_title_rejected(client):
    res = await client.post("/tasks", json={"title": 5})
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "body.title"


async def test_string_id_rejected(client):
    await _create(client, "buy milk")
    res = await client.post("/tasks/toggle", json={"id": "1"})
    assert res.status_code == 400
    assert (await _tasks(client))[0]["completed"] is False


async def test_missing_id_targets_id_zero(client):
    await _create(client, "buy milk")
    for path in ("/tasks/toggle", "/tasks/delete"):
        for payload in ({}, {"id": None}, {"title": "x"}):
            res = await client.post(path, json=payload)
            assert res.status_code == 201
    assert await _tasks(client) == [
        {"id": 1, "title": "buy milk", "completed": False},
    ]


async def test_id_outside_sqlite_integer_range_rejected(client):
    await _create(client, "buy milk")
    for path in ("/tasks/toggle", "/tasks/delete"):
        for task_id in (2**70, 2**63, -2**63 - 1):
            res = await client.post(path, json={"id": task_id})
            assert res.status_code == 400
            assert res.json()["error"]["code"] == "MALFORMED_REQUEST"
    assert len(await _tasks(client)) == 1


async def test_id_at_sqlite_integer_bound_accepted(client):
    res = await client.post("/tasks/toggle", json={"id": 2**63 - 1})
    assert res.status_code == 201


# ─── 500s ───────────────────────────────────────────────────────

async def test_storage_failure_exposes_driver_message(client, store):
    async with store.engine.begin() as conn:
        await conn.execute(text("DROP TABLE tasks"))

    res = await client.get("/tasks")
    assert res.status_code == 500
    body = res.json()["error"]
    assert body["code"] == "STORAGE_QUERY_ERROR"
    assert "no such table: tasks" in body["message"]

    res = await _create(client, "buy milk")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "STORAGE_WRITE_ERROR"


async def test_storage_failure_logged_with_operation_and_task_id(client, store, caplog):
    caplog.set_level(logging.WARNING, logger="todo_api.api.error_handlers")
    async with store.engine.begin() as conn:
        await conn.execute(text("DROP TABLE tasks"))

    res = await client.post("/tasks/toggle", json={"id": 4})
    assert res.status_code == 500

    [record] = [r for r in caplog.records if r.name == "todo_api.api.error_handlers"]
    assert record.error_code == "STORAGE_WRITE_ERROR"
    assert record.operation == "toggle"
    assert record.task_id == 4
