"""User registration, credential checks, and profile lookup against the Users table."""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from tasks_api.core.database import DocumentStore
from tasks_api.core.errors import AuthError, ConflictError
from tasks_api.core.security import hash_password, verify_password
from tasks_api.models import USERS_TABLE

logger = logging.getLogger(__name__)


def find_user_by_email(store: DocumentStore, email: str) -> dict[str, Any] | None:
    """Look up a user through EmailIndex; returns the first match or None."""
    assert USERS_TABLE.index is not None
    items = store.query_index(
        USERS_TABLE.name, USERS_TABLE.index.name, USERS_TABLE.index.key, email
    )
    return items[0] if items else None


def get_user(store: DocumentStore, user_id: str) -> dict[str, Any] | None:
    return store.get_item(USERS_TABLE.name, {USERS_TABLE.key: user_id})


def register_user(
    store: DocumentStore, email: str, password: str, name: str
) -> dict[str, Any]:
    """
    Create a user after checking the email is not taken.

    The check is a read before the write, not a store constraint: two concurrent
    registrations with the same email can both pass it.
    Raises ConflictError if the email is already registered.
    """
    if find_user_by_email(store, email) is not None:
        raise ConflictError("Email already registered")
    user = {
        "id": str(uuid.uuid4()),
        "email": email,
        "password": hash_password(password),
        "name": name,
        "createdAt": datetime.now(UTC).isoformat(),
    }
    store.put_item(USERS_TABLE.name, user)
    logger.info("Registered user id=%s", user["id"])
    return user


def authenticate_user(store: DocumentStore, email: str, password: str) -> dict[str, Any]:
    """Return the user for valid credentials. Raises AuthError otherwise (same message either way)."""
    user = find_user_by_email(store, email)
    if user is None or not verify_password(password, user.get("password", "")):
        raise AuthError("Invalid credentials")
    return user
