"""Tasks table: to-do items owned by exactly one user."""

from tasks_api.models.base import SecondaryIndex, TableDescriptor

# Item attributes: id, userId, title, description, completed, createdAt, updatedAt.
TASKS_TABLE = TableDescriptor(
    name="Tasks",
    key="id",
    index=SecondaryIndex(name="UserIdIndex", key="userId"),
)
