"""Health check endpoints."""

from fastapi import APIRouter, Depends

from taskboard.api.tasks import get_task_store
from taskboard.services.task_store import TaskStore

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(store: TaskStore = Depends(get_task_store)) -> dict[str, str | int]:
    """Readiness check endpoint, reporting the number of stored tasks."""
    return {"status": "ready", "tasks": len(store)}
