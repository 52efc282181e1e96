"""Users table: user accounts for JWT authentication."""

from tasks_api.models.base import SecondaryIndex, TableDescriptor

# Item attributes: id, email, password (bcrypt hash), name, createdAt.
# Email is unique only by lookup-before-insert through EmailIndex.
USERS_TABLE = TableDescriptor(
    name="Users",
    key="id",
    index=SecondaryIndex(name="EmailIndex", key="email"),
)


def public_user(item: dict) -> dict:
    """Return the stored user without the password hash."""
    return {k: v for k, v in item.items() if k != "password"}
