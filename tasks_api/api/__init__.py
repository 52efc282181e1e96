"""API routes."""

from fastapi import APIRouter

from tasks_api.api import auth, health, tasks

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
