"""Todo API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - TaskStore created and initialized in the lifespan, stored on app.state,
      disposed on shutdown; StorageInitError aborts startup
    - Middleware order (outermost first): CORS → request log/recovery → routes,
      so recovered 500s still carry CORS headers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_api.api.error_handlers import register_error_handlers
from todo_api.api.middleware import register_request_middleware
from todo_api.api.routes import health, tasks
from todo_api.config import Settings, get_settings
from todo_api.core.errors import StorageInitError
from todo_api.infrastructure.observability import setup_logging
from todo_api.infrastructure.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        try:
            store = TaskStore(settings.database_url, echo=settings.database_echo)
            try:
                await store.initialize()
            except StorageInitError:
                await store.close()
                raise
        except StorageInitError as e:
            logger.critical(
                f"Failed to initialize task store: {e.message}",
                extra={"error_code": e.code},
            )
            raise
        app.state.task_store = store
        logger.info("Todo API started")
        try:
            yield
        finally:
            logger.info("Todo API shutting down")
            await store.close()
            app.state.task_store = None

    app = FastAPI(title="Todo API", version=health.SERVICE_VERSION, lifespan=lifespan)

    register_request_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(tasks.router)

    register_error_handlers(app)
    return app


app = create_app()
