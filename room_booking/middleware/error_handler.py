import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from room_booking.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)

PUBLIC_BOOKING_PATH = "/room-booking"


def is_public_booking(request: Request) -> bool:
    """The public booking form expects a plain-text 400 for every failure."""
    return request.method == "POST" and request.url.path == PUBLIC_BOOKING_PATH


def _plain_message(msg: str) -> str:
    # pydantic prefixes messages raised from validators
    return msg.removeprefix("Value error, ")


async def app_exception_handler(request: Request, exc: AppException):
    """Handle all AppException subclasses (our custom exceptions)."""
    if is_public_booking(request):
        logger.info(f"Public booking rejected: {exc.message}")
        return PlainTextResponse(exc.message, status_code=status.HTTP_400_BAD_REQUEST)

    detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": detail.get("message", "An error occurred"),
            "error": detail.get("error", {"code": ErrorCode.INTERNAL_SERVER_ERROR}),
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors (422).
    Converts FastAPI's default validation error format into our standardized format.
    """
    details = []
    for error in exc.errors():
        # loc is a tuple like ("body", "customerEmail")
        loc = error.get("loc", [])
        field = ".".join(str(l) for l in loc if l != "body") if loc else "unknown"
        details.append({
            "field": field,
            "message": _plain_message(error.get("msg", "Invalid value")),
        })

    if is_public_booking(request):
        first = details[0] if details else {"field": "", "message": "Invalid booking request"}
        message = first["message"]
        if first["field"] and first["message"] == "Field required":
            message = f"{first['field']}: {message}"
        return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "message": "Validation error. Please check your input.",
            "error": {
                "code": ErrorCode.VALIDATION_ERROR,
                "details": details,
                "field": None,
            }
        }
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """
    Handle SQLAlchemy IntegrityError (unique constraint violations, FK violations).
    Prevents raw DB errors from leaking to the client.
    """
    logger.warning(f"IntegrityError on {request.method} {request.url}: {exc.orig}")
    if is_public_booking(request):
        return PlainTextResponse("Booking could not be saved", status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "success": False,
            "message": "A record with this data already exists.",
            "error": {
                "code": ErrorCode.DUPLICATE_ENTRY,
                "details": None,
                "field": None,
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unexpected exceptions.
    Logs the full traceback, returns a safe 500 response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url}\n"
        f"{traceback.format_exc()}"
    )
    if is_public_booking(request):
        return PlainTextResponse("Booking failed, please try again", status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "An unexpected error occurred. Please try again later.",
            "error": {
                "code": ErrorCode.INTERNAL_SERVER_ERROR,
                "details": None,
                "field": None,
            }
        }
    )
