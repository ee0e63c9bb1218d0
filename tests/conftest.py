"""
Pytest fixtures for blogful tests.

This module provides two sets of fixtures:
1. Raw psycopg fixtures (db_pool, db) - integration tests against TEST_DB_URL
2. Mock connections (make_conn) - unit tests with no database
"""

from unittest.mock import AsyncMock, MagicMock

import psycopg_pool
import pytest
import pytest_asyncio

from blogful.config import get_settings, to_psycopg_url

TEST_DB_URL = to_psycopg_url(get_settings().test_database_url)

SCHEMA = """
CREATE TABLE IF NOT EXISTS blogful_articles (
    id INTEGER PRIMARY KEY GENERATED BY DEFAULT AS IDENTITY,
    title TEXT NOT NULL,
    content TEXT,
    date_published TIMESTAMPTZ NOT NULL
);

CREATE TABLE IF NOT EXISTS shopping_list (
    id INTEGER PRIMARY KEY GENERATED BY DEFAULT AS IDENTITY,
    name TEXT NOT NULL,
    price DECIMAL(12, 2) NOT NULL,
    date_added TIMESTAMPTZ NOT NULL DEFAULT now(),
    checked BOOLEAN NOT NULL DEFAULT false,
    category TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS amazong_products (
    product_id INTEGER PRIMARY KEY GENERATED BY DEFAULT AS IDENTITY,
    name TEXT NOT NULL,
    price DECIMAL(12, 2) NOT NULL,
    image TEXT,
    category TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS whopipe_video_views (
    view_id INTEGER PRIMARY KEY GENERATED BY DEFAULT AS IDENTITY,
    video_name TEXT NOT NULL,
    discipline TEXT,
    date_viewed TIMESTAMPTZ NOT NULL DEFAULT now(),
    region TEXT NOT NULL
);
"""

TRUNCATE = """
TRUNCATE blogful_articles, shopping_list, amazong_products, whopipe_video_views
RESTART IDENTITY
"""

# Check if database is available
_db_available = None


async def check_db_available():
    """Check if the test database is accessible."""
    global _db_available
    if _db_available is not None:
        return _db_available

    try:
        pool = psycopg_pool.AsyncConnectionPool(TEST_DB_URL, min_size=1, max_size=1, open=False)
        await pool.open(wait=True, timeout=5)
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT 1")
        await pool.close()
        _db_available = True
    except Exception as e:
        print(f"Test database not available: {e}")
        _db_available = False

    return _db_available


@pytest_asyncio.fixture
async def db_pool():
    """Create a connection pool for testing."""
    if not await check_db_available():
        pytest.skip("Test database not available")

    pool = psycopg_pool.AsyncConnectionPool(
        TEST_DB_URL,
        min_size=1,
        max_size=2,
        open=False,
    )
    await pool.open()
    yield pool
    await pool.close()


@pytest_asyncio.fixture
async def db(db_pool: psycopg_pool.AsyncConnectionPool):
    """
    Get a database connection on empty tables.
    Creates the tables if needed, truncates them, yields, then truncates again.
    """
    async with db_pool.connection() as conn:
        async with conn.cursor() as cur:
            await cur.execute(SCHEMA)
            await cur.execute(TRUNCATE)
        await conn.commit()

        yield conn

        # Rollback any aborted transaction before cleanup (e.g., from expected test failures)
        await conn.rollback()
        async with conn.cursor() as cur:
            await cur.execute(TRUNCATE)
        await conn.commit()


# =============================================================================
# Mock Connections
# =============================================================================


def make_mock_conn(*, rows=None, row=None, rowcount=0, execute_error=None):
    """
    Create a MagicMock shaped like a psycopg AsyncConnection.

    The cursor is reachable as conn.cur for assertions on execute().
    """
    cur = AsyncMock()
    cur.execute = AsyncMock(side_effect=execute_error)
    cur.fetchall = AsyncMock(return_value=rows or [])
    cur.fetchone = AsyncMock(return_value=row)
    cur.rowcount = rowcount

    conn = MagicMock()
    conn.cursor.return_value.__aenter__ = AsyncMock(return_value=cur)
    # Must be falsy or the context manager would swallow exceptions
    conn.cursor.return_value.__aexit__ = AsyncMock(return_value=None)
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()
    conn.cur = cur
    return conn


@pytest.fixture
def make_conn():
    """Factory fixture for mock connections."""
    return make_mock_conn
