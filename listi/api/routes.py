"""
API routes - Registration and verification endpoints.

This module defines the HTTP endpoints:
- POST /api/register  - Create an account (and send a code when enabled)
- POST /api/verificar - Confirm the emailed code
- POST /api/reenviar  - Issue a new code for a pending account

Client errors are answered with 400 and a readable message; anything
unexpected is logged and answered with a generic 500.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from listi.api.dependencies import get_registration_service
from listi.api.models import (
    ErrorResponse,
    MessageResponse,
    RegisterRequest,
    ResendRequest,
    VerifyRequest,
)
from listi.domain.exceptions import RegistrationError, VerificationFailed
from listi.domain.ports import VerifyResult
from listi.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

REGISTERED = "registered"
REGISTERED_PENDING = "registered, verification code sent"
VERIFIED = "account verified"
CODE_REISSUED = "if the account exists and is pending, a new code was sent"
SERVER_ERROR = "server error"

_error_responses = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Server error"},
}

router = APIRouter(prefix="/api", tags=["registration"])
verification_router = APIRouter(prefix="/api", tags=["verification"])


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an ``{"error": message}`` JSON response."""
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_error_responses,
    summary="Register a new user",
)
def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse | JSONResponse:
    """
    Register a new user.

    - **nombre**: Username, unique
    - **email**: Email address, unique
    - **password**: At least 8 characters with letters and numbers
    """
    try:
        service.register(request_data.nombre, request_data.email, request_data.password)
    except RegistrationError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)
    except Exception:
        logger.exception("Error in /api/register")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)

    message = REGISTERED_PENDING if service.verification_enabled else REGISTERED
    return MessageResponse(message=message)


@verification_router.post(
    "/verificar",
    response_model=MessageResponse,
    responses=_error_responses,
    summary="Verify an email address with the emailed code",
)
def verify(
    request_data: VerifyRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse | JSONResponse:
    """
    Confirm the verification code sent at registration.

    Wrong, expired, exhausted and unknown codes all get the same answer.
    """
    try:
        result = service.verify(request_data.email, request_data.codigo)
    except Exception:
        logger.exception("Error in /api/verificar")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)

    if result is not VerifyResult.SUCCESS:
        return error_response(status.HTTP_400_BAD_REQUEST, VerificationFailed.message)
    return MessageResponse(message=VERIFIED)


@verification_router.post(
    "/reenviar",
    response_model=MessageResponse,
    responses=_error_responses,
    summary="Send a new verification code",
)
def resend(
    request_data: ResendRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> MessageResponse | JSONResponse:
    """Reissue the code for a pending account without revealing whether it exists."""
    try:
        service.resend_code(request_data.email)
    except RegistrationError as exc:
        return error_response(status.HTTP_400_BAD_REQUEST, exc.message)
    except Exception:
        logger.exception("Error in /api/reenviar")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)

    return MessageResponse(message=CODE_REISSUED)
