"""Task CRUD against the Tasks table. Ownership is checked by the caller (see authorization)."""

import uuid
from datetime import UTC, datetime
from typing import Any

from tasks_api.core.database import DocumentStore
from tasks_api.models import TASKS_TABLE

# Fields a client may change on an existing task.
UPDATABLE_FIELDS = ("title", "description", "completed")


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def create_task(
    store: DocumentStore, user_id: str, title: str, description: str = ""
) -> dict[str, Any]:
    """Persist a new task owned by user_id; not completed, both timestamps set to now."""
    now = utc_now_iso()
    task = {
        "id": str(uuid.uuid4()),
        "userId": user_id,
        "title": title,
        "description": description,
        "completed": False,
        "createdAt": now,
        "updatedAt": now,
    }
    store.put_item(TASKS_TABLE.name, task)
    return task


def list_tasks(store: DocumentStore, user_id: str) -> list[dict[str, Any]]:
    """All tasks owned by user_id (via UserIdIndex), oldest first."""
    assert TASKS_TABLE.index is not None
    items = store.query_index(
        TASKS_TABLE.name, TASKS_TABLE.index.name, TASKS_TABLE.index.key, user_id
    )
    return sorted(items, key=lambda t: t.get("createdAt", ""))


def get_task(store: DocumentStore, task_id: str) -> dict[str, Any] | None:
    return store.get_item(TASKS_TABLE.name, {TASKS_TABLE.key: task_id})


def update_task(
    store: DocumentStore, task: dict[str, Any], changes: dict[str, Any]
) -> dict[str, Any]:
    """
    Apply a partial update and refresh updatedAt.

    Only keys in UPDATABLE_FIELDS are applied; omitted fields keep their value.
    Last write wins: there is no version check against concurrent updates.
    """
    updated = dict(task)
    for field in UPDATABLE_FIELDS:
        if field in changes:
            updated[field] = changes[field]
    updated["updatedAt"] = utc_now_iso()
    store.put_item(TASKS_TABLE.name, updated)
    return updated


def delete_task(store: DocumentStore, task_id: str) -> None:
    store.delete_item(TASKS_TABLE.name, {TASKS_TABLE.key: task_id})
