"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Sample applicant payloads and domain inputs
- In-memory repository and fast registration service
- PostgreSQL connection pool (skips when the database is unreachable)
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository import InMemoryApplicantRepository, run_migrations
from src.config.settings import get_settings
from src.domain.applicant import ApplicantInput
from src.domain.registration import RegistrationService
from tests.factories import FAST_BCRYPT_COST, clara_input


@pytest.fixture
def applicant() -> ApplicantInput:
    """Reference applicant: Clara Eklund."""
    return clara_input()


@pytest.fixture
def memory_repository() -> InMemoryApplicantRepository:
    """Empty in-memory applicant store."""
    return InMemoryApplicantRepository()


@pytest.fixture
def service(memory_repository: InMemoryApplicantRepository) -> RegistrationService:
    """Registration service over the in-memory store with a cheap bcrypt cost."""
    return RegistrationService(repository=memory_repository, bcrypt_cost=FAST_BCRYPT_COST)


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Create connection pool for database-backed tests.

    Skips the requesting test when PostgreSQL is not reachable.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    try:
        pool.wait(timeout=5.0)
    except PoolTimeout:
        pool.close()
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean person table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM person")
        conn.commit()
    yield
