#!/usr/bin/env python3
"""
Inspect the live database schema.

Reflects the configured database and logs every table with its columns and
row count, then the tables the application expects but cannot find.
"""

import asyncio
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, inspect, select, table

from boom_booking.config import get_settings
from boom_booking.database import Base, Database
from boom_booking.middleware.logging import configure_logging

logger = logging.getLogger("boom_booking.scripts.check_db_schema")


def _describe(sync_conn) -> dict[str, list[dict]]:
    inspector = inspect(sync_conn)
    return {name: inspector.get_columns(name) for name in inspector.get_table_names()}


async def check_schema(database: Database) -> dict[str, int]:
    """Return {table: row_count} for every table in the database."""
    import boom_booking.models  # noqa: F401

    counts: dict[str, int] = {}
    async with database.engine.connect() as conn:
        tables = await conn.run_sync(_describe)
        for name, columns in sorted(tables.items()):
            logger.info("Table %s", name)
            for column in columns:
                logger.info("  - %s: %s (nullable: %s)", column["name"], column["type"], column["nullable"])
            result = await conn.execute(select(func.count()).select_from(table(name)))
            counts[name] = result.scalar_one()
            logger.info("  rows: %d", counts[name])

    missing = sorted(set(Base.metadata.tables) - set(tables))
    if missing:
        logger.warning("Missing tables: %s", ", ".join(missing))
    return counts


async def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    database = Database.from_settings(settings)
    try:
        await check_schema(database)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
