"""
PostgreSQL repository adapter - Implements ApplicantRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness is enforced by the ``person`` table's UNIQUE constraints, not by
the workflow's duplicate check. When two registrations race past that check,
the losing INSERT raises UniqueViolation, which is translated into
ApplicantAlreadyExists using the violated constraint's name.
"""

import logging
from pathlib import Path

from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.applicant import ApplicantRecord, NewApplicant
from src.domain.exceptions import ApplicantAlreadyExists
from src.domain.ports import ErrorKind

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "person_id, name, surname, pnr, email, password, username, role_id"

# Constraint name -> error kind reported to the client
_CONSTRAINT_ERRORS = {
    "person_username_key": ErrorKind.USERNAME_TAKEN,
    "person_email_key": ErrorKind.EMAIL_TAKEN,
    "person_pnr_key": ErrorKind.PNR_TAKEN,
}


def _row_to_record(row: tuple) -> ApplicantRecord:
    return ApplicantRecord(
        id=row[0],
        name=row[1],
        surname=row[2],
        national_id=row[3],
        email=row[4],
        password_hash=row[5],
        username=row[6],
        role_id=row[7],
    )


class PostgresApplicantRepository:
    """
    Implements ApplicantRepository protocol via psycopg3.

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

    def find_by_username(self, username: str) -> ApplicantRecord | None:
        return self._find_one("username", username)

    def find_by_email(self, email: str) -> ApplicantRecord | None:
        return self._find_one("email", email)

    def find_by_national_id(self, national_id: str) -> ApplicantRecord | None:
        return self._find_one("pnr", national_id)

    def create(self, applicant: NewApplicant) -> ApplicantRecord:
        """
        Insert a new applicant row and return it with its generated id.

        Args:
            applicant: Validated applicant with bcrypt-hashed password

        Returns:
            The stored ApplicantRecord

        Raises:
            ApplicantAlreadyExists: If a UNIQUE constraint rejects the row
        """
        sql = """
            INSERT INTO person (name, surname, pnr, email, password, role_id, username)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING person_id
        """
        params = (
            applicant.name,
            applicant.surname,
            applicant.national_id,
            applicant.email,
            applicant.password_hash,
            applicant.role_id,
            applicant.username,
        )

        with self._pool.connection() as conn, conn.cursor() as cursor:
            try:
                cursor.execute(sql, params)
            except errors.UniqueViolation as e:
                conn.rollback()
                kind = _CONSTRAINT_ERRORS.get(e.diag.constraint_name or "")
                if kind is None:
                    raise
                raise ApplicantAlreadyExists(kind) from e
            person_id = cursor.fetchone()[0]
            conn.commit()

        return ApplicantRecord.from_new(person_id, applicant)

    def _find_one(self, column: str, value: str) -> ApplicantRecord | None:
        # column is one of a fixed set of identifiers, never user input
        sql = f"SELECT {_SELECT_COLUMNS} FROM person WHERE {column} = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (value,))
            row = cursor.fetchone()

        return _row_to_record(row) if row is not None else None


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
