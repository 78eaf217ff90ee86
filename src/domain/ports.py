"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the result vocabulary shared by the workflow
and the API. Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .applicant import ApplicantRecord, NewApplicant


class ErrorKind(str, Enum):
    """
    Registration error taxonomy (flat, no nested causes).

    The value is what clients receive in the ``error`` field.
    """

    MISSING_PARAMETERS = "MISSING_PARAMETERS"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    EMAIL_TAKEN = "EMAIL_TAKEN"
    PNR_TAKEN = "PNR_TAKEN"
    INVALID_EMAIL = "INVALID_EMAIL"
    UNKNOWN = "UNKNOWN"


class EmailFormat(str, Enum):
    """Result of the email shape check."""

    CORRECT_EMAIL = "CORRECT_EMAIL"
    INVALID_EMAIL = "INVALID_EMAIL"


class RegistrationState(str, Enum):
    """
    Registration workflow states.

    Transitions (strictly sequential, short-circuiting):
    - START -> EMPTY_CHECK -> DUPLICATE_CHECK -> EMAIL_CHECK -> PERSIST
    - any check -> FAILED (first failing check wins)

    Terminal States:
    - PERSIST: exactly one applicant record was created
    - FAILED: no store mutation happened
    """

    START = "START"
    EMPTY_CHECK = "EMPTY_CHECK"
    DUPLICATE_CHECK = "DUPLICATE_CHECK"
    EMAIL_CHECK = "EMAIL_CHECK"
    PERSIST = "PERSIST"
    FAILED = "FAILED"


class ApplicantRepository(Protocol):
    """Port interface for applicant persistence."""

    def find_by_username(self, username: str) -> ApplicantRecord | None:
        """Return the applicant registered with this username, if any."""
        ...

    def find_by_email(self, email: str) -> ApplicantRecord | None:
        """Return the applicant registered with this email, if any."""
        ...

    def find_by_national_id(self, national_id: str) -> ApplicantRecord | None:
        """Return the applicant registered with this national ID, if any."""
        ...

    def create(self, applicant: NewApplicant) -> ApplicantRecord:
        """
        Persist a new applicant and assign its identifier.

        Args:
            applicant: Validated applicant with hashed password

        Returns:
            The stored record including its generated id

        Raises:
            ApplicantAlreadyExists: If a uniqueness constraint rejects the row
        """
        ...
