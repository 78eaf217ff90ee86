"""Repository adapters - Database implementations."""

from .memory import InMemoryApplicantRepository
from .postgres import PostgresApplicantRepository, run_migrations

__all__ = ["InMemoryApplicantRepository", "PostgresApplicantRepository", "run_migrations"]
