"""
Raw database connection pool using psycopg3.
Hands out the connections the query and service functions run on.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg_pool
from psycopg import AsyncConnection

from blogful.config import get_settings, to_psycopg_url

logger = logging.getLogger(__name__)

# Global connection pool
pool: psycopg_pool.AsyncConnectionPool | None = None


async def init_pool(database_url: str | None = None) -> None:
    """
    Initialize the psycopg3 async connection pool.

    Args:
        database_url: Overrides the configured DB_URL (e.g. TEST_DB_URL)
    """
    global pool

    settings = get_settings()
    db_url = to_psycopg_url(database_url or settings.database_url)

    logger.info("Initializing psycopg3 connection pool")
    pool = psycopg_pool.AsyncConnectionPool(
        db_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,  # Opened explicitly below
    )
    await pool.open()
    logger.info("psycopg3 connection pool initialized")


async def close_pool() -> None:
    """Close the connection pool."""
    global pool
    if pool:
        logger.info("Closing psycopg3 connection pool")
        await pool.close()
        pool = None


@asynccontextmanager
async def get_conn() -> AsyncGenerator[AsyncConnection, None]:
    """
    Get a connection from the pool.

    Usage:
        async with get_conn() as conn:
            articles = await get_all_articles(conn)
    """
    if pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")

    async with pool.connection() as conn:
        yield conn
