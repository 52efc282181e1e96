"""DynamoDB table descriptors."""

from tasks_api.models.base import SecondaryIndex, TableDescriptor
from tasks_api.models.task import TASKS_TABLE
from tasks_api.models.user import USERS_TABLE, public_user

# Provisioning order: Users before Tasks (tasks reference users by userId).
REQUIRED_TABLES: tuple[TableDescriptor, ...] = (USERS_TABLE, TASKS_TABLE)

__all__ = [
    "REQUIRED_TABLES",
    "SecondaryIndex",
    "TASKS_TABLE",
    "TableDescriptor",
    "USERS_TABLE",
    "public_user",
]
