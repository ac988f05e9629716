from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants for frontend switch/case
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR          = "VALIDATION_ERROR"
    UNAUTHORIZED              = "UNAUTHORIZED"
    TOKEN_EXPIRED             = "TOKEN_EXPIRED"
    REFRESH_TOKEN_INVALID     = "REFRESH_TOKEN_INVALID"
    FORBIDDEN                 = "FORBIDDEN"
    NOT_FOUND                 = "NOT_FOUND"
    DUPLICATE_ENTRY           = "DUPLICATE_ENTRY"
    ACCOUNT_INACTIVE          = "ACCOUNT_INACTIVE"
    INVALID_TIME_RANGE        = "INVALID_TIME_RANGE"
    ROOM_INACTIVE             = "ROOM_INACTIVE"
    OUTSIDE_OPENING_HOURS     = "OUTSIDE_OPENING_HOURS"
    SLOT_UNAVAILABLE          = "SLOT_UNAVAILABLE"
    BOOKING_CONFLICT          = "BOOKING_CONFLICT"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    INTERNAL_SERVER_ERROR     = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
        field: str | None = None,
    ):
        self.message    = message
        self.error_code = error_code
        super().__init__(status_code=status_code, detail={
            "message": message,
            "error": {
                "code": error_code,
                "details": details,
                "field": field,
            }
        })

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# AUTHENTICATION
# ═══════════════════════════════════════════════════════════════════════════════

class UnauthorizedException(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, ErrorCode.UNAUTHORIZED)


class TokenExpiredException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Access token has expired", ErrorCode.TOKEN_EXPIRED)


class RefreshTokenInvalidException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Refresh token is invalid or revoked", ErrorCode.REFRESH_TOKEN_INVALID)


class ForbiddenException(AppException):
    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(status.HTTP_403_FORBIDDEN, message, ErrorCode.FORBIDDEN)


class AccountInactiveException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            "Your account has been deactivated. Contact admin.",
            ErrorCode.ACCOUNT_INACTIVE,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# LOOKUP
# ═══════════════════════════════════════════════════════════════════════════════

class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class DuplicateEntryException(AppException):
    def __init__(self, message: str = "Record already exists", field: str | None = None):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.DUPLICATE_ENTRY, field=field)


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION / SCHEDULING
# ═══════════════════════════════════════════════════════════════════════════════

class ValidationException(AppException):
    def __init__(self, message: str, field: str | None = None,
                 error_code: str = ErrorCode.VALIDATION_ERROR):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, error_code, field=field)


class InvalidTimeRangeException(ValidationException):
    def __init__(self, message: str = "End time must be after start time"):
        super().__init__(message, error_code=ErrorCode.INVALID_TIME_RANGE)


class RoomInactiveException(ValidationException):
    def __init__(self):
        super().__init__("Room is no longer available for booking", error_code=ErrorCode.ROOM_INACTIVE)


class OutsideOpeningHoursException(ValidationException):
    def __init__(self):
        super().__init__(
            "Reservation falls outside the room's opening hours",
            error_code=ErrorCode.OUTSIDE_OPENING_HOURS,
        )


class SlotUnavailableException(ValidationException):
    def __init__(self, message: str = "Room is closed during the requested time"):
        super().__init__(message, error_code=ErrorCode.SLOT_UNAVAILABLE)


class InvalidStatusTransitionException(ValidationException):
    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change reservation status from {current} to {requested}",
            field="status",
            error_code=ErrorCode.INVALID_STATUS_TRANSITION,
        )


class BookingConflictException(AppException):
    def __init__(self, message: str = "Room is already booked for the requested time range"):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.BOOKING_CONFLICT)
