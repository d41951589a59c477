"""
Main entry point for the token ledger host.
"""

import structlog

from .config import settings
from .database.connection import SessionLocal, init_db
from .services.ledger_host import LedgerHost
from .utils.logging import setup_logging


def main(debug=False) -> LedgerHost:
    """Configure logging, create the ledger tables and return a ready host"""
    setup_logging("DEBUG" if debug else settings.LOG_LEVEL)

    logger = structlog.get_logger()
    logger.info("Starting token ledger", version=settings.LEDGER_VERSION)

    try:
        init_db()
        host = LedgerHost(SessionLocal())
    except Exception as e:
        logger.error("Unhandled exception", error=str(e))
        raise

    logger.info("Token ledger ready", database=settings.DB_NAME)
    return host


if __name__ == "__main__":
    main()
