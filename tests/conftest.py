"""Shared fixtures: an isolated app, store and client per test."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.main import create_app
from taskboard.services.task_store import TaskStore


@pytest.fixture
def settings() -> Settings:
    return Settings(SEED_TASKS=[], TEMPLATE_AUTO_RELOAD=False)


@pytest.fixture
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture
def app(settings: Settings, store: TaskStore) -> FastAPI:
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
