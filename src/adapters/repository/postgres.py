"""
PostgreSQL directory adapter - Implements AccountDirectory protocol.

This module provides the PostgreSQL implementation of the domain's
account directory port using psycopg3 with raw SQL.

Uniqueness Design:
-----------------
The domain checks email/phone availability before issuing an activation
token and again before creating the account, but it holds no locks. The
UNIQUE constraints on accounts.email and accounts.phone_number are what
actually prevent two concurrent activations from creating duplicates;
the losing INSERT raises UniqueViolation, reported as DuplicateAccount.
"""

import logging
import uuid
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DirectoryUnavailable, DuplicateAccount
from src.domain.models import Account, PendingRegistration

logger = logging.getLogger(__name__)

_COLUMNS = "id::text, name, email, password_hash, phone_number, created_at"


def _to_account(row: tuple) -> Account:
    return Account(
        id=row[0],
        name=row[1],
        email=row[2],
        hashed_password=row[3],
        phone_number=row[4],
        created_at=row[5],
    )


class PostgresAccountDirectory:
    """
    Implements AccountDirectory protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize directory with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s", (email,))

    def find_by_phone(self, phone_number: int) -> Account | None:
        return self._fetch_one(
            f"SELECT {_COLUMNS} FROM accounts WHERE phone_number = %s", (phone_number,)
        )

    def find_by_id(self, account_id: str) -> Account | None:
        try:
            key = uuid.UUID(account_id)
        except ValueError:
            return None
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE id = %s", (key,))

    def create(self, registration: PendingRegistration) -> Account:
        """
        Insert a new account row.

        Args:
            registration: Verified pending registration (email already normalized)

        Returns:
            The created Account with its generated id

        Raises:
            DuplicateAccount: If email or phone number violates a UNIQUE constraint
            DirectoryUnavailable: If the database cannot be reached
        """
        sql = f"""
            INSERT INTO accounts (name, email, password_hash, phone_number, created_at)
            VALUES (%s, %s, %s, %s, NOW())
            RETURNING {_COLUMNS}
        """
        params = (
            registration.name,
            registration.email,
            registration.hashed_password,
            registration.phone_number,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except errors.UniqueViolation as e:
            constraint = e.diag.constraint_name
            logger.info("Account creation conflict on %s", constraint)
            raise DuplicateAccount(constraint or registration.email) from e
        except psycopg.OperationalError as e:
            logger.error("Account directory unavailable: %s", e)
            raise DirectoryUnavailable("Account directory unavailable") from e

        return _to_account(row)

    def list_all(self) -> list[Account]:
        sql = f"SELECT {_COLUMNS} FROM accounts ORDER BY created_at, email"
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        except psycopg.OperationalError as e:
            logger.error("Account directory unavailable: %s", e)
            raise DirectoryUnavailable("Account directory unavailable") from e
        return [_to_account(row) for row in rows]

    def _fetch_one(self, sql: str, params: tuple) -> Account | None:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
        except psycopg.OperationalError as e:
            logger.error("Account directory unavailable: %s", e)
            raise DirectoryUnavailable("Account directory unavailable") from e
        return _to_account(row) if row is not None else None


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
