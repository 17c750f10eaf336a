"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parents[1]

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="forbid",
    )

    PROJECT_NAME: str = "Task Board"
    VERSION: str = "0.1.0"
    DEBUG: bool = Field(default=False, description="Debug mode")

    # Server
    PORT: int = Field(default=8080, description="Port the server listens on")
    LOG_LEVEL: LogLevel = Field(
        default="info",
        description="Root logging level, uvicorn names (trace maps to debug)",
    )

    # Sessions
    SESSION_COOKIE_NAME: str = Field(
        default="TASKBOARD_SESSION",
        description="Name of the anonymous session cookie",
    )

    # Request headers
    REQUEST_ID_HEADER: str = Field(
        default="X-Request-ID",
        description="Header carrying the per-request correlation id",
    )
    FRAGMENT_HEADER: str = Field(
        default="HX-Request",
        description="Header sent by htmx on progressive-enhancement requests",
    )

    # Templates / static assets
    TEMPLATES_DIR: str = Field(
        default=str(_PACKAGE_DIR / "templates"),
        description="Directory holding the Jinja2 templates",
    )
    STATIC_DIR: str = Field(
        default=str(_PACKAGE_DIR / "static"),
        description="Directory served under /static",
    )
    TEMPLATE_AUTO_RELOAD: bool = Field(
        default=True,
        description="Re-check template files on every render (development hot reload)",
    )

    # Tasks
    SEED_TASKS: list[str] = Field(
        default_factory=list,
        description="Titles added to the store at startup. Example: SEED_TASKS='[\"Buy milk\"]'",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


settings = Settings()
