"""
Process entry point.
Wires settings, logging, the store, the ledger engine and the console client.
"""

import argparse
import sys
from typing import List, Optional

from card_ledger.cli import BankingClient, InputReader
from card_ledger.core.config import Settings, settings
from card_ledger.core.exceptions import StorageError
from card_ledger.core.logging import get_logger, setup_logging
from card_ledger.services.ledger import LedgerEngine
from card_ledger.store.sql import open_store

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="card-ledger",
        description=f"{settings.PROJECT_NAME} - interactive card account manager",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.VERSION} ({settings.PROJECT_NAME})",
    )
    parser.add_argument(
        "--database-url",
        help=f"SQLAlchemy database URL (default: {settings.DATABASE_URL})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Log level (default: {settings.LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    overrides = {}
    if args.database_url:
        overrides["DATABASE_URL"] = args.database_url
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    config: Settings = settings.model_copy(update=overrides)

    setup_logging(config.LOG_LEVEL, config.LOG_FORMAT, sql_echo=config.DATABASE_ECHO)

    try:
        store = open_store(config.DATABASE_URL, echo=config.DATABASE_ECHO)
    except StorageError as e:
        logger.critical("Startup failed: %s", e, exc_info=True)
        print(f"Critical error: {e}", file=sys.stderr)
        return 1

    try:
        engine = LedgerEngine(store, settings=config)
        BankingClient(engine, InputReader()).run()
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
