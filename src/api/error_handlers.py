"""
Global exception handlers.

Every fault that escapes a route is answered with 400 {"error": "UNKNOWN"}:
- RequestValidationError (malformed JSON, wrong field types)
- Exception (catch-all, e.g. database unavailable)

Internal details are logged, never returned to the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.domain.ports import ErrorKind

logger = logging.getLogger(__name__)


def unknown_error_response() -> JSONResponse:
    """Build the generic client error for unanticipated failures."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=ErrorKind.UNKNOWN).model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Malformed request on %s: %s", request.url.path, exc.errors())
        return unknown_error_response()

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return unknown_error_response()
