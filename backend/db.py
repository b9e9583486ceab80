"""
Database connection helper.

This module centralizes how connections are created. The bootstrap
builds one `psycopg_pool.ConnectionPool` and hands it to `EventRepo`;
repository code borrows a connection per statement.

Usage:
    from db import create_pool
    pool = create_pool(settings)
    pool.open(wait=True)
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
    pool.close()
"""

from psycopg_pool import ConnectionPool

from settings import Settings

CONNECT_TIMEOUT = 5


def create_pool(settings: Settings) -> ConnectionPool:
    """Return an unopened connection pool for `settings.db_url`.

    Each pooled connection gets a short `connect_timeout` so requests
    don't hang indefinitely if the database is unreachable. The caller
    owns the pool and must `open()` and `close()` it.
    """

    return ConnectionPool(
        settings.db_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        kwargs={"connect_timeout": CONNECT_TIMEOUT},
        open=False,
        name="calendar-events",
    )
