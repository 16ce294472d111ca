"""Checkout database management CLI.

Creates and drops the database schema for the checkout domain, using the
provider configured for the active PROTEAN_ENV.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

import structlog

logger = structlog.get_logger(__name__)


def _checkout_domain():
    from checkout.domain import checkout
    from checkout.utils.logging import configure_logging

    configure_logging()
    checkout.init()
    return checkout


def setup_database():
    from checkout.utils.db import setup_db

    domain = _checkout_domain()
    setup_db(domain)
    logger.info("Schema ready", domain=domain.name)


def drop_database():
    from checkout.utils.db import drop_db

    domain = _checkout_domain()
    drop_db(domain)
    logger.info("Schema dropped", domain=domain.name)


def main():
    parser = argparse.ArgumentParser(description="Checkout database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
