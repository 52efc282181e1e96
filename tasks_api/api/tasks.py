"""Task CRUD endpoints. Every route requires a Bearer token; tasks are scoped to their owner."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from tasks_api.api.auth import get_current_user
from tasks_api.core.database import DocumentStore, get_store
from tasks_api.core.errors import StoreError
from tasks_api.schemas.auth import CurrentUser
from tasks_api.schemas.common import ErrorResponse
from tasks_api.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from tasks_api.services.authorization import TaskAccess, check_task_access
from tasks_api.services.tasks import (
    create_task,
    delete_task,
    get_task,
    list_tasks,
    update_task,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Status and message per denied access outcome; identical for get, update and delete.
ACCESS_DENIED: dict[TaskAccess, tuple[int, str]] = {
    TaskAccess.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Task not found"),
    TaskAccess.FORBIDDEN: (status.HTTP_403_FORBIDDEN, "Access denied"),
}

OWNED_TASK_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _store_failure(action: str, e: StoreError) -> HTTPException:
    logger.exception("%s failed: %s", action, e.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action.lower()}",
    )


def get_owned_task(
    task_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> dict[str, Any]:
    """Dependency: fetch the task and apply the ownership guard. Raises 404 before 403."""
    try:
        task = get_task(store, task_id)
    except StoreError as e:
        raise _store_failure("Fetching task", e) from e
    access = check_task_access(current_user.id, task)
    if access is not TaskAccess.ALLOWED:
        status_code, detail = ACCESS_DENIED[access]
        raise HTTPException(status_code=status_code, detail=detail)
    assert task is not None
    return task


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def post_task(
    body: TaskCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> dict[str, Any]:
    """Create a task owned by the caller. The owner always comes from the token."""
    try:
        return create_task(store, current_user.id, body.title, body.description)
    except StoreError as e:
        raise _store_failure("Creating task", e) from e


@router.get(
    "",
    response_model=list[TaskResponse],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_tasks(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> list[dict[str, Any]]:
    """List the caller's tasks."""
    try:
        return list_tasks(store, current_user.id)
    except StoreError as e:
        raise _store_failure("Listing tasks", e) from e


@router.get("/{task_id}", response_model=TaskResponse, responses=OWNED_TASK_RESPONSES)
def get_task_by_id(
    task: Annotated[dict[str, Any], Depends(get_owned_task)],
) -> dict[str, Any]:
    return task


@router.put("/{task_id}", response_model=TaskResponse, responses=OWNED_TASK_RESPONSES)
def put_task(
    body: TaskUpdate,
    task: Annotated[dict[str, Any], Depends(get_owned_task)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> dict[str, Any]:
    """Partially update a task: omitted (or null) fields keep their current value."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        return update_task(store, task, changes)
    except StoreError as e:
        raise _store_failure("Updating task", e) from e


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_TASK_RESPONSES,
)
def remove_task(
    task: Annotated[dict[str, Any], Depends(get_owned_task)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> Response:
    try:
        delete_task(store, task["id"])
    except StoreError as e:
        raise _store_failure("Deleting task", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
