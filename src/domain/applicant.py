"""
Applicant data structures.

Plain immutable value objects passed between the API, the workflow and
the repositories.
"""

from dataclasses import dataclass

# Role assigned to every self-registered applicant
APPLICANT_ROLE_ID = 2


@dataclass(frozen=True)
class ApplicantInput:
    """Registration data as submitted by the applicant (request-scoped)."""

    name: str
    surname: str
    national_id: str
    email: str
    password: str
    username: str


@dataclass(frozen=True)
class NewApplicant:
    """Validated applicant ready to be persisted (no id assigned yet)."""

    name: str
    surname: str
    national_id: str
    email: str
    password_hash: str
    username: str
    role_id: int


@dataclass(frozen=True)
class ApplicantRecord:
    """Persisted applicant."""

    id: int
    name: str
    surname: str
    national_id: str
    email: str
    password_hash: str
    username: str
    role_id: int

    @classmethod
    def from_new(cls, id: int, applicant: NewApplicant) -> "ApplicantRecord":
        return cls(
            id=id,
            name=applicant.name,
            surname=applicant.surname,
            national_id=applicant.national_id,
            email=applicant.email,
            password_hash=applicant.password_hash,
            username=applicant.username,
            role_id=applicant.role_id,
        )
