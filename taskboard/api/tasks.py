"""Task list endpoints.

Both mutating routes answer with ``303 See Other`` to ``GET /tasks``
(POST-Redirect-GET), whether or not anything changed. htmx follows the
redirect and sends ``HX-Request`` on the follow-up GET, so it receives the
list fragment while plain browsers get the full page.
"""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse

from taskboard.core.context import RequestContext, get_request_context
from taskboard.core.errors import InvalidInputError
from taskboard.core.rendering import TemplateRenderer, build_template_context, get_renderer
from taskboard.services.task_store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter()

TASKS_PAGE = "tasks/index.html"
TASKS_FRAGMENT = "tasks/_list.html"

_TASK_ID_RE = re.compile(r"\+?[0-9]+")


def get_task_store(request: Request) -> TaskStore:
    """FastAPI dependency returning the app's task store."""
    return request.app.state.task_store


def parse_task_id(raw: str) -> int:
    """Parse a path segment as a non-negative task id.

    Raises:
        InvalidInputError: If ``raw`` is not a decimal integer with an optional ``+``
    """
    if not _TASK_ID_RE.fullmatch(raw):
        raise InvalidInputError("id", raw, "Task id must be a non-negative integer")
    return int(raw)


def _redirect_to_tasks() -> RedirectResponse:
    return RedirectResponse(url="/tasks", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/tasks", response_class=HTMLResponse)
async def list_tasks(
    store: TaskStore = Depends(get_task_store),
    renderer: TemplateRenderer = Depends(get_renderer),
    context: RequestContext = Depends(get_request_context),
) -> HTMLResponse:
    """Render the task list, or only the list fragment for htmx requests."""
    tasks = await run_in_threadpool(store.all)
    template = TASKS_FRAGMENT if context.is_fragment else TASKS_PAGE
    data = build_template_context({"title": "Tasks", "tasks": tasks}, context)
    html = await run_in_threadpool(renderer.render, template, data)
    return HTMLResponse(html)


@router.post("/tasks")
async def create_task(
    title: str = Form(default=""),
    store: TaskStore = Depends(get_task_store),
) -> RedirectResponse:
    """Add a task; blank titles are ignored."""
    try:
        await run_in_threadpool(store.add, title)
    except InvalidInputError as exc:
        logger.debug("Ignoring create request: %s", exc.message)
    return _redirect_to_tasks()


@router.post("/tasks/{task_id}/delete")
async def delete_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
) -> RedirectResponse:
    """Delete a task; malformed or unknown ids are ignored."""
    try:
        parsed_id = parse_task_id(task_id)
    except InvalidInputError as exc:
        logger.debug("Ignoring delete request: %s", exc.message)
    else:
        await run_in_threadpool(store.delete, parsed_id)
    return _redirect_to_tasks()
