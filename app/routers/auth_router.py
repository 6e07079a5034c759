from fastapi import APIRouter, Depends
import logging

from ..application.services.auth_service import AuthService
from ..config import Settings
from ..dependencies import get_app_settings, get_auth_service
from ..schemas.auth.auth import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from ..schemas.common.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/send-otp",
    response_model=SendOtpResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
)
def send_otp(
    payload: SendOtpRequest,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    Issue a one-time code for a phone number.

    The code is included in the response only when EXPOSE_OTP_IN_RESPONSE is on.
    """
    issued = auth_service.request_otp(payload.phone, expose_code=settings.EXPOSE_OTP_IN_RESPONSE)
    return SendOtpResponse(
        success=True,
        message="OTP sent successfully",
        phone=issued.phone,
        expires_at=issued.expires_at,
        code=issued.code,
    )


@router.post(
    "/verify-otp",
    response_model=VerifyOtpResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def verify_otp(payload: VerifyOtpRequest, auth_service: AuthService = Depends(get_auth_service)):
    """
    Verify a code, logging in an existing user or registering a new one.

    Unknown phones need name, flat, floor, block and role; without them the
    response carries error MISSING_REGISTRATION_FIELDS and the code stays valid.
    """
    user = auth_service.verify_otp(payload.phone, payload.get_code(), payload.profile_fields())
    return VerifyOtpResponse(success=True, message="OTP verified successfully", user=user)
