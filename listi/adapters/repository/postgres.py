"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design:
-------------------
1. **Registration**: a single ``INSERT ... ON CONFLICT DO NOTHING`` against
   the unique indexes on ``nombre_usuario`` and ``correo_electronico``. The
   affected row count is the only duplicate signal, so two concurrent
   registrations for the same identity cannot both succeed.

2. **Verification**: the user row is read with ``SELECT ... FOR UPDATE`` so
   concurrent guesses are serialized and every failure is counted.

3. **Code comparison**: ``secrets.compare_digest`` on the stored code.
"""

import logging
import secrets
from datetime import datetime
from importlib import resources

from psycopg_pool import ConnectionPool

from listi.domain.ports import VerifyResult

logger = logging.getLogger(__name__)


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        code: str | None,
        code_expires_at: datetime | None,
    ) -> bool:
        """
        Insert a user unless the username or email already exists.

        Returns:
            True if inserted, False if a unique index rejected the row
        """
        sql = """
            INSERT INTO usuarios (
                nombre_usuario, correo_electronico, contraseña,
                codigo_verificacion, codigo_expira, intentos_verificacion, verificado
            )
            VALUES (%s, %s, %s, %s, %s, 0, false)
            ON CONFLICT DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (username, email, password_hash, code, code_expires_at))
            conn.commit()
            return cursor.rowcount == 1

    def verify_code(self, email: str, code: str, max_attempts: int) -> VerifyResult:
        """
        Verify a code and mark the user verified if it matches.

        Check order: pending code exists, attempts below limit, not expired,
        code matches. A mismatch is counted against the current code.
        """
        select_sql = """
            SELECT codigo_verificacion, verificado, intentos_verificacion,
                   codigo_expira IS NOT NULL AND codigo_expira <= NOW() AS expirado
            FROM usuarios
            WHERE correo_electronico = %s
            FOR UPDATE
        """

        verify_sql = """
            UPDATE usuarios
            SET verificado = true,
                codigo_verificacion = NULL,
                codigo_expira = NULL,
                intentos_verificacion = 0
            WHERE correo_electronico = %s AND verificado = false
        """

        increment_sql = """
            UPDATE usuarios
            SET intentos_verificacion = intentos_verificacion + 1
            WHERE correo_electronico = %s AND verificado = false
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(select_sql, (email,))
            row = cursor.fetchone()

            if row is None:
                conn.commit()
                return VerifyResult.NOT_FOUND

            stored_code, verified, attempt_count, expired = row

            if verified or stored_code is None:
                conn.commit()
                return VerifyResult.NOT_FOUND

            if attempt_count >= max_attempts:
                conn.commit()
                return VerifyResult.LOCKED

            if expired:
                conn.commit()
                return VerifyResult.EXPIRED

            if not secrets.compare_digest(stored_code.encode(), code.encode()):
                cursor.execute(increment_sql, (email,))
                conn.commit()
                if attempt_count + 1 >= max_attempts:
                    return VerifyResult.LOCKED
                return VerifyResult.INVALID_CODE

            cursor.execute(verify_sql, (email,))
            conn.commit()
            return VerifyResult.SUCCESS

    def replace_code(self, email: str, code: str, code_expires_at: datetime) -> str | None:
        """Reissue a code for a pending user, returning the username or None."""
        sql = """
            UPDATE usuarios
            SET codigo_verificacion = %s,
                codigo_expira = %s,
                intentos_verificacion = 0
            WHERE correo_electronico = %s AND verificado = false
            RETURNING nombre_usuario
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (code, code_expires_at, email))
            row = cursor.fetchone()
            conn.commit()
            return row[0] if row is not None else None


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files shipped in ``listi.migrations``.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration must be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    migrations_dir = resources.files("listi") / "migrations"
    sql_files = sorted(
        (entry for entry in migrations_dir.iterdir() if entry.name.endswith(".sql")),
        key=lambda entry: entry.name,
    )

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text(encoding="utf-8")

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
