from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from room_booking.database import get_db
from room_booking.models.user import User
from room_booking.models.role import RoleName
from room_booking.utils.security import verify_access_token
from room_booking.utils.exceptions import (
    UnauthorizedException,
    ForbiddenException,
    AccountInactiveException,
)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


# ─── Get Current User ─────────────────────────────────────────────────────────
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Validate JWT Bearer token and return the current User.
    Raises 401 if token is missing, invalid, expired, or the user no longer exists.
    Raises 403 if account is inactive.
    """
    if not credentials:
        raise UnauthorizedException("No authentication token provided")

    payload = verify_access_token(credentials.credentials)
    user_id = payload.get("sub")

    if user_id is None:
        raise UnauthorizedException("Invalid token payload")

    user = db.query(User).filter(User.id == int(user_id)).first()
    if not user:
        raise UnauthorizedException("User not found")

    if not user.isActive:
        raise AccountInactiveException()

    return user


# ─── Role Guards ──────────────────────────────────────────────────────────────
def require_roles(*roles: RoleName):
    """
    Factory that returns a FastAPI dependency requiring one of the given roles.

    Usage:
        @router.get("/audit-logs")
        def route(current_user = Depends(require_roles(RoleName.ADMIN))):
            ...
    """
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role.name not in roles:
            raise ForbiddenException(
                f"This action requires one of these roles: {[r.value for r in roles]}"
            )
        return current_user
    return dependency


def get_admin_user(current_user: User = Depends(require_roles(RoleName.ADMIN))) -> User:
    return current_user
