"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from .ports import ErrorKind


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ApplicantAlreadyExists(RegistrationError):
    """
    A uniqueness constraint rejected a new applicant record.

    Raised by repositories when two registrations race past the duplicate
    check with the same username, email or national ID.
    """

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind
