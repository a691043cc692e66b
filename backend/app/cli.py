"""Database management commands.

Usage: python -m app.cli [status|seed|reset|reset-and-seed]
"""

import argparse
import asyncio
import logging
import sys

from app.config import get_settings
from app.db import utils as db_utils
from app.db.postgres import Database, database, init_db
from app.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def status(db: Database) -> None:
    logger.info("Checking database status...")
    connected = await db_utils.check_connection(db)
    logger.info("Connection: %s", "connected" if connected else "failed")
    info = await db_utils.get_info(db)
    if info:
        logger.info("Database info: %s", info)
    if not connected:
        raise ConnectionError("Database is not reachable")


async def seed(db: Database) -> None:
    logger.info("Seeding database...")
    await init_db(db)
    created = await db_utils.seed(db)
    logger.info("Created %s", created)


async def reset(db: Database) -> None:
    logger.info("Resetting database...")
    await db_utils.reset(db)


async def reset_and_seed(db: Database) -> None:
    await reset(db)
    await seed(db)


COMMANDS = {
    "status": (status, "Check database connection and info"),
    "seed": (seed, "Add sample data to database"),
    "reset": (reset, "Clear all data (not allowed in production)"),
    "reset-and-seed": (reset_and_seed, "Reset and add sample data"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="insights-db", description="Database management commands")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)
    return parser


async def run(command: str, db: Database) -> None:
    handler, _ = COMMANDS[command]
    try:
        await handler(db)
    finally:
        await db.dispose()


def main(argv: list[str] | None = None, db: Database | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_settings().log_level)

    try:
        asyncio.run(run(args.command, db or database))
    except Exception as e:
        logger.error("Operation failed: %s", e)
        return 1
    logger.info("Operation completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
