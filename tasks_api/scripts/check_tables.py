"""
Check store connectivity and print every table with its status. Run from project root:
  python -m tasks_api.scripts.check_tables

Exits 1 if the store is unreachable or a required table is missing or not ACTIVE.
"""
import logging
import sys

from tasks_api.core.config import get_settings
from tasks_api.core.database import DocumentStore, check_db_connected, create_store
from tasks_api.core.errors import StoreError
from tasks_api.services.bootstrap import validate_tables

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def report_tables(store: DocumentStore) -> dict[str, str]:
    """Return {table name: status} for every table the store lists."""
    statuses: dict[str, str] = {}
    for name in store.list_tables():
        try:
            statuses[name] = store.describe_table(name).status
        except StoreError as e:
            logger.warning("Could not describe table %s: %s", name, e.message)
            statuses[name] = "UNKNOWN"
    return statuses


def main(store: DocumentStore | None = None) -> int:
    store = store or create_store(get_settings())
    if not check_db_connected(store):
        logger.error("Failed to connect to DynamoDB")
        return 1
    logger.info("Successfully connected to DynamoDB")
    try:
        statuses = report_tables(store)
    except StoreError as e:
        logger.error("Error listing tables: %s", e.message)
        return 1
    if not statuses:
        print("No tables found.")
    for name, table_status in sorted(statuses.items()):
        print(f"{name}\t{table_status}")
    return 0 if validate_tables(store) else 1


if __name__ == "__main__":
    sys.exit(main())
