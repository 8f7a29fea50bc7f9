"""Integration-test fixtures (requires a running PostgreSQL with migrations applied).

Pre-condition: alembic upgrade head

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session. Tests are skipped when the database is unreachable.
"""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pt_common.database import engine, get_db_session


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def database_ready() -> AsyncIterator[None]:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM transactions LIMIT 1"))
    except (OSError, DBAPIError) as exc:
        pytest.skip(f"PostgreSQL not available: {exc}")
    yield
    await engine.dispose()


@pytest_asyncio.fixture(loop_scope="session")
async def db(database_ready: None) -> AsyncIterator[AsyncSession]:
    async for session in get_db_session():
        yield session
