"""Jinja2 rendering boundary.

Templates live in ``taskboard/templates``:
- Partials start with an underscore: ``tasks/_list.html``, ``tasks/_item.html``
- Layouts sit in the ``_layout/`` subdirectory
- Full pages are at the root or in feature subdirectories

Usage:
    renderer = TemplateRenderer(settings.TEMPLATES_DIR)
    data = build_template_context({"tasks": store.all()}, context)
    html = renderer.render("tasks/index.html", data)

``render`` never looks at the request; the implicit keys (``session_id`` and
``is_htmx``) are merged beforehand by ``build_template_context``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import Request
from jinja2 import Environment, FileSystemLoader, Undefined, select_autoescape

from taskboard.core.context import RequestContext

logger = logging.getLogger(__name__)

ANONYMOUS_SESSION = "anonymous"


class TemplateRenderer:
    """Render templates to HTML strings with autoescaping always on."""

    def __init__(self, templates_dir: str, auto_reload: bool = True):
        self.templates_dir = templates_dir
        self._env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html", "htm"], default=True),
            auto_reload=auto_reload,
            undefined=Undefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        logger.debug("Jinja2 templates loaded from %s", templates_dir)

    def render(self, template_name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render ``template_name`` with ``data``.

        Args:
            template_name: Template path relative to the templates directory
            data: Variables exposed to the template

        Returns:
            Rendered HTML
        """
        template = self._env.get_template(template_name)
        return template.render(dict(data or {}))


def build_template_context(
    data: Mapping[str, Any] | None, context: RequestContext | None
) -> dict[str, Any]:
    """Return a copy of ``data`` with the implicit template keys added.

    The implicit keys take precedence over keys of the same name in ``data``.
    """
    enriched = dict(data or {})
    enriched["session_id"] = context.session_id if context else ANONYMOUS_SESSION
    enriched["is_htmx"] = context.is_fragment if context else False
    return enriched


def get_renderer(request: Request) -> TemplateRenderer:
    """FastAPI dependency returning the app's renderer."""
    return request.app.state.renderer
