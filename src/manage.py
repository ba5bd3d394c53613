"""OrderDesk database management CLI.

Creates or drops the ordering schema on the SQL providers configured for
the domain (the default in-memory provider has nothing to create).

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

import structlog

from ordering.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def _ordering_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


def setup_database():
    from ordering.utils.db import setup_db

    domain = _ordering_domain()
    logger.info("Creating ordering database schema")
    setup_db(domain)
    logger.info("Ordering schema ready")


def drop_database():
    from ordering.utils.db import drop_db

    domain = _ordering_domain()
    logger.info("Dropping ordering database schema")
    drop_db(domain)
    logger.info("Ordering schema dropped")


def main(argv=None):
    parser = argparse.ArgumentParser(description="OrderDesk database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
