"""
Registration domain service - Applicant registration workflow.

This module contains the core business logic for applicant registration:
a fixed sequence of validation checks followed by a single insert.

Registration Workflow (Sequential, Short-Circuiting)
====================================================

States:
- START: request received
- EMPTY_CHECK: every required field must be non-empty
- DUPLICATE_CHECK: username, email and national ID must be unused
- EMAIL_CHECK: email must have the shape local@domain
- PERSIST: terminal success, exactly one record created
- FAILED: terminal failure, no store mutation

Transitions:
    START -> EMPTY_CHECK -> DUPLICATE_CHECK -> EMAIL_CHECK -> PERSIST
    EMPTY_CHECK     -> FAILED(MISSING_PARAMETERS)
    DUPLICATE_CHECK -> FAILED(USERNAME_TAKEN | EMAIL_TAKEN | PNR_TAKEN)
    EMAIL_CHECK     -> FAILED(INVALID_EMAIL)
    PERSIST         -> FAILED(<taken>)  (uniqueness race lost at the store)

Note: the check-then-create sequence is not atomic. Concurrent duplicates
are rejected by the repository's uniqueness constraints and surface as
ApplicantAlreadyExists, which is folded into a FAILED outcome here.
"""

import base64
import hashlib
import logging
from dataclasses import dataclass, field

import bcrypt

from .applicant import APPLICANT_ROLE_ID, ApplicantInput, ApplicantRecord, NewApplicant
from .exceptions import ApplicantAlreadyExists
from .ports import ApplicantRepository, EmailFormat, ErrorKind, RegistrationState
from .validation import ApplicantValidator

logger = logging.getLogger(__name__)


def _prehash(password: str) -> bytes:
    """
    Reduce a password to a fixed 44-byte input for bcrypt.

    bcrypt only reads the first 72 bytes (bcrypt 5 rejects longer input),
    so the SHA-256 digest is hashed instead of the raw password.
    """
    return base64.b64encode(hashlib.sha256(password.encode()).digest())


def hash_password(password: str, cost: int = 10) -> str:
    """Hash password using bcrypt (salted, adaptive) over its SHA-256 pre-hash."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=cost)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a hash made by hash_password."""
    return bcrypt.checkpw(_prehash(password), password_hash.encode())


@dataclass(frozen=True)
class RegistrationOutcome:
    """Tagged result of a registration attempt."""

    state: RegistrationState
    error: ErrorKind | None = None
    applicant: ApplicantRecord | None = None

    @classmethod
    def persisted(cls, applicant: ApplicantRecord) -> "RegistrationOutcome":
        return cls(state=RegistrationState.PERSIST, applicant=applicant)

    @classmethod
    def failed(cls, error: ErrorKind) -> "RegistrationOutcome":
        return cls(state=RegistrationState.FAILED, error=error)

    @property
    def succeeded(self) -> bool:
        return self.state == RegistrationState.PERSIST


@dataclass
class RegistrationService:
    """
    Domain service for applicant registration.

    Orchestrates the registration flow: validation in a fixed order,
    password hashing, and record persistence.
    """

    repository: ApplicantRepository
    validator: ApplicantValidator = field(default_factory=ApplicantValidator)
    role_id: int = APPLICANT_ROLE_ID
    bcrypt_cost: int = 10

    def register(self, applicant: ApplicantInput) -> RegistrationOutcome:
        """
        Validate an applicant and persist it if every check passes.

        Args:
            applicant: Registration data as submitted

        Returns:
            RegistrationOutcome in state PERSIST with the stored record,
            or in state FAILED with the first error encountered
        """
        # EMPTY_CHECK
        if self.validator.check_empty_fields(applicant) is not None:
            return RegistrationOutcome.failed(ErrorKind.MISSING_PARAMETERS)

        # DUPLICATE_CHECK
        duplicate = self.validator.check_duplicate(applicant, self.repository)
        if duplicate is not None:
            return RegistrationOutcome.failed(duplicate)

        # EMAIL_CHECK
        if self.validator.check_email_format(applicant) != EmailFormat.CORRECT_EMAIL:
            return RegistrationOutcome.failed(ErrorKind.INVALID_EMAIL)

        # PERSIST
        new_applicant = NewApplicant(
            name=applicant.name,
            surname=applicant.surname,
            national_id=applicant.national_id,
            email=applicant.email,
            password_hash=hash_password(applicant.password, self.bcrypt_cost),
            username=applicant.username,
            role_id=self.role_id,
        )
        try:
            record = self.repository.create(new_applicant)
        except ApplicantAlreadyExists as exc:
            logger.info(
                "Store rejected username %s after duplicate check: %s",
                applicant.username,
                exc.kind.value,
            )
            return RegistrationOutcome.failed(exc.kind)

        logger.debug("Newly registered applicant with username: %s", record.username)
        return RegistrationOutcome.persisted(record)
