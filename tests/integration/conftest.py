"""
Shared fixtures for integration tests.

Integration tests run against a real PostgreSQL database configured through
the usual settings (DATABASE_URL or DB_*). They are skipped when the
database cannot be reached.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from listi.adapters.repository.postgres import PostgresUserRepository, run_migrations
from listi.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create a migrated connection pool, or skip if PostgreSQL is unavailable."""
    conninfo = get_settings().conninfo()
    try:
        with psycopg.connect(conninfo, connect_timeout=3):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    pool = ConnectionPool(conninfo=conninfo, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean usuarios table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM usuarios")
        conn.commit()
    yield
