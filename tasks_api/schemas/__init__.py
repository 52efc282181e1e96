"""Pydantic request/response schemas."""

from tasks_api.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserOut,
    UserProfile,
)
from tasks_api.schemas.common import ErrorResponse
from tasks_api.schemas.health import HealthErrorResponse, HealthResponse
from tasks_api.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "ErrorResponse",
    "HealthErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "UserOut",
    "UserProfile",
]
