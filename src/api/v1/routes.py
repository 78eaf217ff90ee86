"""
API routes.

Defines the REST endpoints for applicant registration:
- GET /api/register - Sign-up form
- POST /api/register - Validate and persist a new applicant
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from src.api.v1.pages import SIGNUP_PAGE
from src.domain.applicant import ApplicantInput
from src.domain.ports import ErrorKind
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])


def _offending_value(applicant: ApplicantInput, error: ErrorKind) -> str:
    """Pick the submitted value that caused a failure, for logging."""
    if error == ErrorKind.USERNAME_TAKEN:
        return f"username={applicant.username}"
    if error in (ErrorKind.EMAIL_TAKEN, ErrorKind.INVALID_EMAIL):
        return f"email={applicant.email}"
    if error == ErrorKind.PNR_TAKEN:
        return f"pnr={applicant.national_id}"
    return f"username={applicant.username}"


@router.get(
    "/register",
    response_class=HTMLResponse,
    summary="Sign-up form",
)
async def signup_page() -> str:
    """Serve the HTML form that submits to POST /api/register."""
    return SIGNUP_PAGE


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Registration rejected"},
    },
    summary="Register a new applicant",
    description="Submit name, surname, personal number, email, password and username. "
    "On failure the body names the first check that failed.",
)
def register(
    request_data: RegisterRequest,
    request: Request,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Register a new applicant.

    Checks run in order and the first failure is returned:
    - **MISSING_PARAMETERS**: a field is empty
    - **USERNAME_TAKEN** / **EMAIL_TAKEN** / **PNR_TAKEN**: already registered
    - **INVALID_EMAIL**: email is not of the form local@domain
    """
    applicant = request_data.to_applicant()
    client_ip = request.client.host if request.client else "unknown"

    outcome = service.register(applicant)

    if not outcome.succeeded:
        logger.warning(
            "Registration failed from ip %s: %s (%s)",
            client_ip,
            outcome.error.value,
            _offending_value(applicant, outcome.error),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=outcome.error).model_dump(mode="json"),
        )

    logger.info(
        "Registration successful for ip %s: username=%s email=%s",
        client_ip,
        applicant.username,
        applicant.email,
    )
    return RegisterResponse()
