"""Task ownership guard shared by every task endpoint that reads or mutates an existing task."""

from enum import Enum
from typing import Any


class TaskAccess(str, Enum):
    """Outcome of an ownership check. Existence is decided before ownership."""

    ALLOWED = "allowed"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


def check_task_access(user_id: str, task: dict[str, Any] | None) -> TaskAccess:
    """Return NOT_FOUND if task is None, FORBIDDEN if user_id does not own it, else ALLOWED."""
    if task is None:
        return TaskAccess.NOT_FOUND
    if task.get("userId") != user_id:
        return TaskAccess.FORBIDDEN
    return TaskAccess.ALLOWED
