"""
Catalog API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session (no real DB needed)
    ├── db_engine:       in-memory SQLite engine with all tables created
    ├── db_session:      AsyncSession bound to db_engine
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── sample_products: plain objects shaped like Product rows
    └── test_client:     HTTPX AsyncClient against app.main.app
"""

import os

# Override settings BEFORE any app imports: app.config builds the settings
# singleton and app.database the engine at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEBUG"] = "false"
os.environ.pop("API_KEY", None)

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models.product import Product  # noqa: F401  (registers the table)


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.get.return_value = product
        result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test; StaticPool keeps one shared connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def sample_products():
    """Three Product-shaped objects with ids 1..3."""
    now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
    return [
        SimpleNamespace(
            id=i,
            name=f"Product {i}",
            description=f"Description {i}",
            price=Decimal("10.50") * i,
            image_url=f"https://example.com/{i}.jpg",
            created_at=now,
            updated_at=now,
        )
        for i in range(1, 4)
    ]


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    raise_app_exceptions=False: ServerErrorMiddleware re-raises after
    rendering a 500; the test wants the rendered response.
    """
    from app.main import app
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
