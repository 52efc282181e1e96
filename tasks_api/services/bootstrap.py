"""
Startup table bootstrap: make sure every required table exists and is ACTIVE.

Two levels of retry: an outer policy around the whole sequence (connectivity,
then each table in order) and an inner readiness poll after a table is created.
Table creation is eventually consistent, so a describe right after create can
still report CREATING.
"""

import logging
import time
from typing import TYPE_CHECKING

from tasks_api.core.database import TABLE_STATUS_ACTIVE, DocumentStore, check_db_connected
from tasks_api.core.errors import (
    NotFoundError,
    StoreConnectionError,
    StoreError,
    TableNotReadyError,
)
from tasks_api.core.retry import RetryPolicy, Sleep, retry_call
from tasks_api.models import REQUIRED_TABLES, TableDescriptor

if TYPE_CHECKING:
    from tasks_api.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_BOOTSTRAP_POLICY = RetryPolicy(max_attempts=5, delay=3.0)
DEFAULT_READINESS_POLICY = RetryPolicy(max_attempts=10, delay=2.0)


def bootstrap_policy(settings: "Settings") -> RetryPolicy:
    """Outer retry policy from BOOTSTRAP_* settings."""
    return RetryPolicy(
        max_attempts=settings.BOOTSTRAP_MAX_ATTEMPTS,
        delay=settings.BOOTSTRAP_RETRY_DELAY_SEC,
        multiplier=settings.BOOTSTRAP_BACKOFF_MULTIPLIER,
    )


def readiness_policy(settings: "Settings") -> RetryPolicy:
    """Per-table readiness poll policy from TABLE_READY_* settings."""
    return RetryPolicy(
        max_attempts=settings.TABLE_READY_MAX_ATTEMPTS,
        delay=settings.TABLE_READY_POLL_INTERVAL_SEC,
    )


def wait_for_table(
    store: DocumentStore,
    name: str,
    policy: RetryPolicy = DEFAULT_READINESS_POLICY,
    sleep: Sleep = time.sleep,
) -> None:
    """
    Poll DescribeTable until the table is ACTIVE.

    Non-active statuses and store errors both count as a spent attempt.
    Raises TableNotReadyError once the budget is exhausted.
    """
    logger.info("Waiting for table %s to be active...", name)
    for attempt in range(1, policy.max_attempts + 1):
        try:
            status = store.describe_table(name).status
        except StoreError as e:
            logger.warning("Error checking table %s status: %s", name, e.message)
        else:
            if status == TABLE_STATUS_ACTIVE:
                logger.info("Table %s is now active", name)
                return
            logger.info("Table %s status: %s, waiting...", name, status)
        if attempt < policy.max_attempts:
            sleep(policy.delay_for(attempt))
    raise TableNotReadyError(name, policy.max_attempts)


def ensure_table(
    store: DocumentStore,
    descriptor: TableDescriptor,
    readiness: RetryPolicy = DEFAULT_READINESS_POLICY,
    sleep: Sleep = time.sleep,
) -> bool:
    """
    Create the table if DescribeTable reports it missing, then wait until ACTIVE.

    An existing ACTIVE table is left untouched; an existing table in any other
    status is waited on but not recreated. Returns True if the table was created.
    """
    try:
        description = store.describe_table(descriptor.name)
    except NotFoundError:
        store.create_table(descriptor)
        logger.info("%s table creation initiated", descriptor.name)
        wait_for_table(store, descriptor.name, readiness, sleep)
        logger.info("%s table created and ready", descriptor.name)
        return True

    if description.status == TABLE_STATUS_ACTIVE:
        logger.info("%s table already exists", descriptor.name)
    else:
        logger.info(
            "%s table already exists with status %s", descriptor.name, description.status
        )
        wait_for_table(store, descriptor.name, readiness, sleep)
    return False


def initialize_tables(
    store: DocumentStore,
    settings: "Settings | None" = None,
    *,
    policy: RetryPolicy | None = None,
    readiness: RetryPolicy | None = None,
    tables: tuple[TableDescriptor, ...] = REQUIRED_TABLES,
    sleep: Sleep = time.sleep,
) -> list[str]:
    """
    Ensure every table exists and is ACTIVE, retrying the whole sequence on failure.

    Policies come from settings when given, else the defaults (5 x 3s outer,
    10 x 2s readiness). Returns the names of tables created on the successful
    attempt; an already provisioned store yields an empty list. Any error
    restarts the sequence; the last one is re-raised when the outer budget is
    spent.
    """
    if policy is None:
        policy = bootstrap_policy(settings) if settings else DEFAULT_BOOTSTRAP_POLICY
    if readiness is None:
        readiness = readiness_policy(settings) if settings else DEFAULT_READINESS_POLICY

    def attempt() -> list[str]:
        if not check_db_connected(store):
            raise StoreConnectionError("Unable to connect to DynamoDB")
        logger.info("Successfully connected to DynamoDB")
        created = [
            descriptor.name
            for descriptor in tables
            if ensure_table(store, descriptor, readiness, sleep)
        ]
        return created

    created = retry_call(
        attempt,
        policy,
        retry_on=(Exception,),
        sleep=sleep,
        description="Table initialization",
    )
    logger.info("All tables initialized successfully (created: %s)", created or "none")
    return created


def validate_tables(
    store: DocumentStore,
    tables: tuple[TableDescriptor, ...] = REQUIRED_TABLES,
) -> bool:
    """Return True only if every required table is listed and ACTIVE. Never raises."""
    try:
        existing = set(store.list_tables())
        for descriptor in tables:
            if descriptor.name not in existing:
                logger.error("Required table %s is missing", descriptor.name)
                return False
            status = store.describe_table(descriptor.name).status
            if status != TABLE_STATUS_ACTIVE:
                logger.error(
                    "Table %s is not active (status: %s)", descriptor.name, status
                )
                return False
    except StoreError as e:
        logger.error("Error validating tables: %s", e.message)
        return False
    except Exception:
        logger.exception("Unexpected error validating tables")
        return False
    logger.info("All required tables are present and active")
    return True
