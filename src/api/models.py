"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field presence is not enforced here: missing fields default to "" so the
registration workflow reports them as MISSING_PARAMETERS.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.domain.applicant import ApplicantInput
from src.domain.ports import ErrorKind


class RegisterRequest(BaseModel):
    """Request model for applicant registration."""

    # JSON numbers (e.g. a numeric pnr) are accepted as strings
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    surname: str = ""
    national_id: str = Field(
        "",
        validation_alias=AliasChoices("pnr", "nationalId", "national_id"),
        description="Personal identity number (personnummer)",
    )
    email: str = ""
    password: str = ""
    username: str = ""

    def to_applicant(self) -> ApplicantInput:
        """Convert to the domain input type."""
        return ApplicantInput(
            name=self.name,
            surname=self.surname,
            national_id=self.national_id,
            email=self.email,
            password=self.password,
            username=self.username,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration (empty body)."""


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: ErrorKind
