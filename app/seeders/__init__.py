"""
Catalog API — Database Seeders
================================

What:  Fixture data loaders run at setup time.
How:   DatabaseSeeder runs each registered seeder in order on one session and
       commits once; any failure rolls the whole run back.
Who:   `python -m app.seeders` (see __main__.py) and tests.

Seeder Inventory:
    - ProductSeeder: five demo products (not idempotent)
"""

import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import async_session_factory
from app.seeders.product_seeder import PRODUCTS, ProductSeeder

logger = logging.getLogger(__name__)

__all__ = ["DatabaseSeeder", "ProductSeeder", "PRODUCTS"]


class DatabaseSeeder:
    """
    Runs the configured seeders inside a single transaction.

    Args:
        seeders:         seeder instances, each exposing `async run(session)`
        session_factory: defaults to the application's async_session_factory
    """

    def __init__(
        self,
        seeders: Optional[Sequence] = None,
        session_factory: Optional[async_sessionmaker] = None,
    ):
        self.seeders = list(seeders) if seeders is not None else [ProductSeeder()]
        self.session_factory = session_factory or async_session_factory

    async def run(self) -> None:
        async with self.session_factory() as session:
            try:
                await self.run_with(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def run_with(self, session: AsyncSession) -> None:
        for seeder in self.seeders:
            logger.info("Seeding: %s", type(seeder).__name__)
            await seeder.run(session)
