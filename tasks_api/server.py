"""
Server entrypoint: provision tables, validate them, then serve. Run from project root:

  python -m tasks_api.server

Exits 1 without binding the port if the tables cannot be made ready.
"""

import logging
import sys

import uvicorn

from tasks_api.core.config import get_settings
from tasks_api.core.database import create_store
from tasks_api.main import create_app
from tasks_api.services.bootstrap import initialize_tables, validate_tables

logger = logging.getLogger(__name__)


def main() -> int:
    """Run the table bootstrap and the readiness gate, then start uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    store = create_store(settings)
    try:
        initialize_tables(store, settings)
    except Exception as e:
        logger.exception("Table initialization failed, not starting server: %s", e)
        return 1
    if not validate_tables(store):
        logger.error("Required tables are not ready, not starting server")
        return 1

    app = create_app(settings, store)
    logger.info("Server running at http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
