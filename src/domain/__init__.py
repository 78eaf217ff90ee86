"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for applicant registration.
It defines its own port interfaces for infrastructure abstraction, ensuring
true hexagonal architecture decoupling.
"""

from .applicant import APPLICANT_ROLE_ID, ApplicantInput, ApplicantRecord, NewApplicant
from .exceptions import ApplicantAlreadyExists, RegistrationError
from .ports import ApplicantRepository, EmailFormat, ErrorKind, RegistrationState
from .registration import RegistrationOutcome, RegistrationService, hash_password, verify_password
from .validation import (
    ApplicantValidator,
    check_duplicate,
    check_email_format,
    check_empty_fields,
    is_well_formed_email,
)

__all__ = [
    "APPLICANT_ROLE_ID",
    "ApplicantAlreadyExists",
    "ApplicantInput",
    "ApplicantRecord",
    "ApplicantRepository",
    "ApplicantValidator",
    "EmailFormat",
    "ErrorKind",
    "NewApplicant",
    "RegistrationError",
    "RegistrationOutcome",
    "RegistrationService",
    "RegistrationState",
    "check_duplicate",
    "check_email_format",
    "check_empty_fields",
    "hash_password",
    "is_well_formed_email",
    "verify_password",
]
