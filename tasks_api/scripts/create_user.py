"""
Create a user without going through the HTTP API. Run from project root:
  python -m tasks_api.scripts.create_user EMAIL PASSWORD NAME
Example:
  python -m tasks_api.scripts.create_user a@example.com your-secure-password "Ada"
"""
import argparse
import sys

from pydantic import EmailStr, TypeAdapter, ValidationError

from tasks_api.core.config import get_settings
from tasks_api.core.database import create_store
from tasks_api.core.errors import ConflictError, StoreError
from tasks_api.core.security import NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from tasks_api.services.users import register_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Tasks API user.")
    parser.add_argument("email", help="Email (must not be registered yet)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    args = parser.parse_args(argv)

    try:
        email = TypeAdapter(EmailStr).validate_python(args.email.strip())
    except ValidationError:
        print("Invalid email address.", file=sys.stderr)
        return 1
    name = args.name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    store = create_store(get_settings())
    try:
        user = register_user(store, email, args.password, name)
    except ConflictError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    except StoreError as e:
        print(f"Could not create user: {e.message}", file=sys.stderr)
        return 1
    print(f"Created user '{email}' with id '{user['id']}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
