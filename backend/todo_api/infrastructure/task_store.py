"""Task Store: durable CRUD over the tasks table in an embedded SQLite file.

Invariants:
    - One engine (and connection pool) per TaskStore, disposed by close()
    - Every operation is a single statement in its own session, committed once
    - Every SQLAlchemy exception rolls back and is re-raised as the operation's
      storage error (StorageQueryError / StorageWriteError) with the driver text
    - toggle/delete on an unknown id affect zero rows and do not raise

Design Decisions:
    - Explicit instance injected into the HTTP layer (app.state), not a module
      singleton: tests and the lifespan each own their store
    - expire_on_commit=False: returned Task rows stay readable after the
      session closes
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from todo_api.core.errors import (
    ErrorContext, StorageError, StorageInitError, StorageQueryError,
    StorageWriteError,
)
from todo_api.db.base import Base
from todo_api.models.task import Task

logger = logging.getLogger(__name__)


def _driver_message(exc: SQLAlchemyError) -> str:
    """Underlying DB-API message, without SQLAlchemy's statement dump."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class TaskStore:
    """Owns the tasks table: initialize, list, create, toggle, delete."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        try:
            self.engine = create_async_engine(database_url, echo=echo)
        except SQLAlchemyError as e:
            raise StorageInitError(_driver_message(e)) from e
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._closed = False

    async def initialize(self) -> None:
        """Create the tasks table if absent. Safe to call on every startup."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            message = (
                _driver_message(e) if isinstance(e, SQLAlchemyError) else str(e)
            )
            logger.error(
                f"Failed to initialize task store: {message}",
                extra={"operation": "initialize"},
            )
            raise StorageInitError(message) from e
        logger.info(
            "Task store initialized", extra={"operation": "initialize"},
        )

    async def close(self) -> None:
        """Dispose the engine and its pool. Idempotent."""
        if self._closed:
            return
        await self.engine.dispose()
        self._closed = True

    @asynccontextmanager
    async def _session(
        self,
        error_cls: type[StorageError],
        operation: str,
        task_id: int | None = None,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session; map SQLAlchemy failures to error_cls after rollback."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message = _driver_message(e)
            logger.error(
                f"DB {operation} failed: {message}",
                extra={"operation": operation, "task_id": task_id},
            )
            raise error_cls(
                message, operation=operation,
                context=ErrorContext(task_id=task_id),
            ) from e
        finally:
            await session.close()

    async def list_tasks(self) -> list[Task]:
        """All rows in storage-native order."""
        async with self._session(StorageQueryError, "list") as session:
            result = await session.execute(select(Task))
            return list(result.scalars().all())

    async def create(self, title: str) -> None:
        """Insert a task with completed=false. Caller guarantees a non-empty title."""
        async with self._session(StorageWriteError, "create") as session:
            await session.execute(
                insert(Task).values(title=title, completed=False),
            )
            await session.commit()

    async def toggle(self, task_id: int) -> None:
        """Flip completed for task_id. Unknown ids are a silent no-op."""
        async with self._session(StorageWriteError, "toggle", task_id) as session:
            result = await session.execute(
                update(Task)
                .where(Task.id == task_id)
                .values(completed=~Task.completed)
                .execution_options(synchronize_session=False),
            )
            await session.commit()
        if result.rowcount == 0:
            logger.debug(
                f"Toggle matched no task {task_id}",
                extra={"operation": "toggle", "task_id": task_id},
            )

    async def delete(self, task_id: int) -> None:
        """Remove task_id. Unknown ids are a silent no-op."""
        async with self._session(StorageWriteError, "delete", task_id) as session:
            result = await session.execute(
                delete(Task)
                .where(Task.id == task_id)
                .execution_options(synchronize_session=False),
            )
            await session.commit()
        if result.rowcount == 0:
            logger.debug(
                f"Delete matched no task {task_id}",
                extra={"operation": "delete", "task_id": task_id},
            )

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self._session(StorageQueryError, "health") as session:
                await session.execute(text("SELECT 1"))
            return True
        except StorageError as e:
            logger.error(f"DB health check failed: {e}")
            return False


def get_task_store(request: Request) -> TaskStore:
    """FastAPI dependency: the store created by the application lifespan."""
    store = getattr(request.app.state, "task_store", None)
    if store is None:
        raise RuntimeError("Task store not initialized")
    return store
