"""Tests for the Jinja2 rendering boundary in isolation."""

from pathlib import Path

import pytest

from taskboard.core.config import Settings
from taskboard.core.context import RequestContext
from taskboard.core.rendering import (
    ANONYMOUS_SESSION,
    TemplateRenderer,
    build_template_context,
)
from taskboard.services.task_store import Task


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer(Settings().TEMPLATES_DIR, auto_reload=False)


def _context(**overrides: object) -> RequestContext:
    values: dict[str, object] = {"session_id": "s" * 22, "correlation_id": "abc123"}
    values.update(overrides)
    return RequestContext(**values)


def test_build_template_context_adds_implicit_keys() -> None:
    data = {"tasks": []}
    enriched = build_template_context(data, _context(is_fragment=True))
    assert enriched == {"tasks": [], "session_id": "s" * 22, "is_htmx": True}
    assert data == {"tasks": []}


def test_build_template_context_without_request_context() -> None:
    enriched = build_template_context({}, None)
    assert enriched["session_id"] == ANONYMOUS_SESSION
    assert enriched["is_htmx"] is False


def test_implicit_keys_take_precedence() -> None:
    enriched = build_template_context({"session_id": "spoofed"}, _context())
    assert enriched["session_id"] == "s" * 22


def test_render_full_page(renderer: TemplateRenderer) -> None:
    tasks = [Task(id=1, title="A"), Task(id=2, title="B")]
    html = renderer.render(
        "tasks/index.html", build_template_context({"title": "Tasks", "tasks": tasks}, None)
    )
    assert "<title>Tasks</title>" in html
    assert html.index(">A</span>") < html.index(">B</span>")
    assert 'data-session-id="anonymous"' in html


def test_render_fragment_has_no_layout(renderer: TemplateRenderer) -> None:
    html = renderer.render("tasks/_list.html", {"tasks": [Task(id=7, title="x")]})
    assert "<html" not in html
    assert 'id="task-7"' in html
    assert 'action="/tasks/7/delete"' in html


def test_render_escapes_by_default(renderer: TemplateRenderer) -> None:
    html = renderer.render("tasks/_list.html", {"tasks": [Task(id=1, title='"><b>x</b>')]})
    assert "<b>x</b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html


def test_autoescape_applies_to_any_template(tmp_path: Path) -> None:
    (tmp_path / "plain.txt").write_text("{{ value }}")
    html = TemplateRenderer(str(tmp_path)).render("plain.txt", {"value": "<i>"})
    assert html == "&lt;i&gt;"


def test_missing_variables_render_empty(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("[{{ nothing }}]")
    assert TemplateRenderer(str(tmp_path)).render("page.html") == "[]"
