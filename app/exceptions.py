import logging
from typing import Any, List, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    """HTTPException carrying a machine-readable error code."""

    code = "ERROR"
    status = 400

    def __init__(self, detail: str, data: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(status_code=status_code or self.status, detail=detail)
        self.data = data


class InvalidInputError(APIException):
    code = "INVALID_INPUT"


class InvalidOrExpiredOtpError(APIException):
    code = "INVALID_OR_EXPIRED_OTP"


class MissingRegistrationFieldsError(APIException):
    """New phone number; the caller must resubmit with a full profile."""

    code = "MISSING_REGISTRATION_FIELDS"

    def __init__(self, missing: List[str]):
        super().__init__(
            "Name, flat, floor, block, and role are required for new users",
            data={"missing": missing},
        )
        self.missing = missing


class PayloadValidationError(APIException):
    code = "VALIDATION_ERROR"


class NotFoundError(APIException):
    code = "NOT_FOUND"
    status = 404


class OtpConsumedError(APIException):
    """The OTP was consumed but the user could not be stored."""

    code = "OTP_CONSUMED"
    status = 409


def create_error_response(error_code: str, message: str, data: Optional[Any] = None) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "error": error_code,
        "message": message,
        "data": data,
    }


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.code, str(exc.detail), exc.data),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for plain HTTPException"""
    code = NotFoundError.code if exc.status_code == 404 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(code, str(exc.detail)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=create_error_response(PayloadValidationError.code, "Invalid request data", errors),
    )
