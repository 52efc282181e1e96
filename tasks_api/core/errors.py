"""Error taxonomy shared by the store, the bootstrap, and the request handlers."""


class TasksApiError(Exception):
    """Base for application errors; carries a caller-safe message and the original cause."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class StoreError(TasksApiError):
    """The document store rejected or failed a request."""


class StoreConnectionError(StoreError):
    """The document store is unreachable (network, endpoint, or timeout)."""


class NotFoundError(StoreError):
    """A table, user, or task does not exist."""


class ConflictError(TasksApiError):
    """A uniqueness rule was violated (e.g. email already registered)."""


class AuthError(TasksApiError):
    """Invalid credentials or a missing, invalid, or expired token."""


class ForbiddenError(TasksApiError):
    """Authenticated, but not the owner of the requested resource."""


class TableNotReadyError(TimeoutError):
    """A table did not become ACTIVE within its readiness budget."""

    def __init__(self, table_name: str, attempts: int) -> None:
        self.table_name = table_name
        self.attempts = attempts
        self.message = (
            f"Timeout waiting for table {table_name} to become active "
            f"after {attempts} attempts"
        )
        super().__init__(self.message)
