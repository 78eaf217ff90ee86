"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.config.settings import get_settings
from src.domain.ports import ApplicantRepository
from src.domain.registration import RegistrationService
from src.domain.validation import ApplicantValidator

# Module-level singleton - ApplicantValidator is stateless
_validator = ApplicantValidator()


def get_pool(request: Request) -> ConnectionPool | None:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    It is None when the in-memory applicant store is configured.
    """
    return getattr(request.app.state, "pool", None)


def get_repository(request: Request) -> ApplicantRepository:
    """Get the applicant repository created during app lifespan startup."""
    return request.app.state.repository


def get_validator() -> ApplicantValidator:
    """Get applicant validator (singleton)."""
    return _validator


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, validator and security settings.
    """
    settings = get_settings()
    return RegistrationService(
        repository=get_repository(request),
        validator=get_validator(),
        role_id=settings.applicant_role_id,
        bcrypt_cost=settings.bcrypt_cost,
    )
