"""
Run all seeders against the configured database.

Usage:
    python -m app.seeders

The products table must exist first (`alembic upgrade head`).
"""

import asyncio
import logging

from app.database import dispose_engine
from app.logging_config import setup_logging
from app.seeders import DatabaseSeeder

logger = logging.getLogger("app.seeders")


async def main() -> None:
    try:
        await DatabaseSeeder().run()
    finally:
        await dispose_engine()
    logger.info("Database seeding completed")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
