"""Fixed error pages and HTTP exception handlers.

The pages are self-contained (inline CSS, no template lookup) so they render
even when the template directory is broken.
"""

from __future__ import annotations

from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

_ERROR_PAGE_STYLE = """
        body {
            background-color: #000;
            color: #fff;
            font-family: system-ui, -apple-system, sans-serif;
            display: flex;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
            margin: 0;
            padding: 1rem;
        }
        main {
            text-align: center;
        }
        h1 {
            font-size: 3rem;
            margin-bottom: 1rem;
        }
        p {
            font-size: 1.125rem;
            margin: 0.5rem 0;
        }
        a {
            color: #4A90E2;
            text-decoration: none;
        }
        a:hover {
            text-decoration: underline;
        }
        a:focus {
            outline: 3px solid #4A90E2;
            outline-offset: 2px;
        }
"""


def _error_page(title: str, *paragraphs: str) -> str:
    body = "\n".join(f"        <p>{p}</p>" for p in paragraphs)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>{_ERROR_PAGE_STYLE}    </style>
</head>
<body>
    <main>
        <h1>{title}</h1>
{body}
    </main>
</body>
</html>
"""


ERROR_404_HTML = _error_page(
    "404 - Page Not Found",
    "The page you're looking for doesn't exist.",
    '<a href="/tasks">Go to Task List</a>',
)

ERROR_500_HTML = _error_page(
    "500 - Something Went Wrong",
    "The server could not complete your request.",
    '<a href="/tasks">Go to Task List</a>',
)


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Serve the fixed 404 page; other HTTP errors keep FastAPI's default handling."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return HTMLResponse(ERROR_404_HTML, status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)
