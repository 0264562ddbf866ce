"""
asyncpg pool holding the connections to the Supabase call data.

This module owns the process-wide asyncpg pool. The pool is the only
long-lived resource in the service; everything computed from it is
request-scoped. Services never touch the pool directly - they receive a
CallResultsSource (see measure_effect.services.data_source) built on top of it.

Lifecycle:
- init_db(): called from the FastAPI lifespan; creates _pool once
- get_db_pool(): used by the data source; creates _pool on first use
- close_db(): called on shutdown; drops _pool

Connection Pool Configuration (from Settings):
- db_pool_min_size: minimum idle connections kept in pool (default 2)
- db_pool_max_size: maximum connections in pool (default 10)
- db_command_timeout: query timeout in seconds (default 60)

Usage:
    # At application startup (in FastAPI lifespan)
    await init_db()

    # In the data source
    pool = await get_db_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT * FROM call_results LIMIT 10")

    # At application shutdown
    await close_db()
"""

from typing import Optional

import asyncpg
from asyncpg import Pool

from measure_effect.core.config import get_settings


# =============================================================================
# Global Pool Singleton
# =============================================================================

# None until init_db() is called
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Create the pool from Settings unless it already exists.

    Idempotent: if the pool already exists it is returned unchanged.

    Returns:
        The shared asyncpg Pool.

    Raises:
        asyncpg.PostgresError: If the server rejects the connection.
        OSError: If the host cannot be reached.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Return the pool, creating it on first use.

    Returns:
        The shared asyncpg Pool.

    Raises:
        asyncpg.PostgresError: If the lazy connection attempt fails.
    """
    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the pool and forget it.

    Waits for active queries to finish. Calling it when no pool exists is a
    no-op, and a later get_db_pool() creates a fresh pool.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None

