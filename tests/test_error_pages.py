import logging
from pathlib import Path

from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.core.logging import CorrelationIdFilter
from taskboard.main import create_app
from taskboard.services.task_store import TaskStore


def test_unknown_route_returns_friendly_404(client: TestClient) -> None:
    resp = client.get("/nonexistent")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "404 - Page Not Found" in resp.text
    assert 'href="/tasks"' in resp.text


def test_404_still_sets_session_cookie(client: TestClient) -> None:
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert "TASKBOARD_SESSION" in resp.cookies


def test_other_http_errors_keep_default_handling(client: TestClient) -> None:
    resp = client.get("/tasks/1/delete")
    assert resp.status_code == 405
    assert resp.json() == {"detail": "Method Not Allowed"}


def test_template_failure_returns_generic_500(tmp_path: Path, caplog) -> None:
    (tmp_path / "tasks").mkdir()
    (tmp_path / "tasks" / "index.html").write_text("{% if %}broken{% endif %}")
    settings = Settings(TEMPLATES_DIR=str(tmp_path), SEED_TASKS=[])
    app = create_app(settings=settings, store=TaskStore())

    caplog.handler.addFilter(CorrelationIdFilter())
    caplog.set_level(logging.ERROR, logger="taskboard")

    with TestClient(app) as client:
        resp = client.get("/tasks", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    assert "500 - Something Went Wrong" in resp.text
    assert "Traceback" not in resp.text
    assert "TemplateSyntaxError" not in resp.text
    assert resp.headers["x-request-id"] == "req-500"

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert errors[-1].correlation_id == "req-500"
    assert errors[-1].exc_info is not None
