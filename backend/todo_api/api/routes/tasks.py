"""Task Routes: list, create, toggle, delete.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
      (shape failures surface as MalformedRequestError, 400)
    - Mutations answer 201 with a {"message": ...} body, toggle and delete included
    - toggle/delete on an unknown id still answer 201
    - Storage errors propagate untouched to the global TodoError handler (500)
"""

import logging

from fastapi import APIRouter, Depends, status

from todo_api.core.enforce_task import check_title
from todo_api.infrastructure.task_store import TaskStore, get_task_store
from todo_api.schemas.task import (
    MessageResponse, TaskCreate, TaskIdentifier, TaskResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
async def list_tasks(store: TaskStore = Depends(get_task_store)):
    """All tasks, in storage order. Empty table → []."""
    tasks = await store.list_tasks()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post(
    "", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_task(
    body: TaskCreate, store: TaskStore = Depends(get_task_store),
):
    """Create a task. The generated id is not returned."""
    title = check_title(body.title)
    await store.create(title)
    logger.info("Task added", extra={"operation": "create"})
    return MessageResponse(message="Task added successfully")


@router.post(
    "/toggle", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def toggle_task(
    body: TaskIdentifier, store: TaskStore = Depends(get_task_store),
):
    await store.toggle(body.id)
    logger.info("Task toggled", extra={"task_id": body.id, "operation": "toggle"})
    return MessageResponse(message="Task toggled successfully")


@router.post(
    "/delete", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def delete_task(
    body: TaskIdentifier, store: TaskStore = Depends(get_task_store),
):
    await store.delete(body.id)
    logger.info("Task deleted", extra={"task_id": body.id, "operation": "delete"})
    return MessageResponse(message="Task deleted successfully")
