"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, status
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.api import health, tasks
from taskboard.api.errors import not_found_handler
from taskboard.api.middleware import RequestContextMiddleware
from taskboard.core.config import Settings
from taskboard.core.config import settings as default_settings
from taskboard.core.logging import configure_logging
from taskboard.core.rendering import TemplateRenderer
from taskboard.core.session import SessionAssigner
from taskboard.services.task_store import TaskStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_settings: Settings = app.state.settings
    logger.info("Starting %s...", app_settings.PROJECT_NAME)
    logger.info("Templates loaded from %s", app.state.renderer.templates_dir)
    logger.info("Task store holds %d task(s)", len(app.state.task_store))
    yield
    logger.info("Shutting down %s...", app_settings.PROJECT_NAME)


def _mount_static(app: FastAPI, static_dir: str) -> None:
    static_path = Path(static_dir).resolve()
    if not static_path.is_dir():
        logger.warning("Static directory '%s' does not exist; /static is not served", static_path)
        return
    app.mount("/static", StaticFiles(directory=str(static_path)), name="static")


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use instead of the environment-derived defaults
        store: Task store to share between handlers; a new one is created if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Server-rendered task list with progressive enhancement",
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.task_store = store if store is not None else TaskStore(settings.SEED_TASKS)
    app.state.renderer = TemplateRenderer(
        settings.TEMPLATES_DIR, auto_reload=settings.TEMPLATE_AUTO_RELOAD
    )

    app.add_middleware(
        RequestContextMiddleware,
        sessions=SessionAssigner(settings.SESSION_COOKIE_NAME),
        request_id_header=settings.REQUEST_ID_HEADER,
        fragment_header=settings.FRAGMENT_HEADER,
    )
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    _mount_static(app, settings.STATIC_DIR)

    app.include_router(health.router, tags=["health"])
    app.include_router(tasks.router, tags=["tasks"])

    @app.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        """Send visitors to the task list."""
        return RedirectResponse(url="/tasks", status_code=status.HTTP_303_SEE_OTHER)

    return app


app = create_app()
