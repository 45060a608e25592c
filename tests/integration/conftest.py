"""Integration test fixtures for database operations.

These fixtures require a PostgreSQL database at DATABASE_URL. Tests are
skipped when it cannot be reached.
"""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.taskboard.core import db
from src.taskboard.core.config import get_settings
from tests.utils.cleanup import cleanup_all

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def run_migrations_sync() -> None:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "src" / "alembic"))
    command.upgrade(config, "head")


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    await db.dispose_engine()

    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    try:
        async with test_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, DBAPIError) as e:
        await test_engine.dispose()
        pytest.skip(f"database not reachable: {e}")

    await asyncio.to_thread(run_migrations_sync)

    yield test_engine

    async with test_engine.connect() as conn:
        await cleanup_all(conn)
        await conn.commit()
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session shaped like the one the API uses (no expiry on commit)."""
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session
