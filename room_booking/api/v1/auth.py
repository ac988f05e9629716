from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from room_booking.database import get_db
from room_booking.dependencies import get_current_user
from room_booking.models.user import User
from room_booking.schemas.auth import (
    LoginRequest, RefreshTokenRequest, LogoutRequest, LoginResponse, RefreshResponse,
)
from room_booking.schemas.common import SuccessResponse, success_response
from room_booking.services.auth_service import auth_service, serialize_user

router = APIRouter(prefix="/auth")


# ─── POST /auth/login ─────────────────────────────────────────────────────────
@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login and receive access + refresh tokens",
    response_model=SuccessResponse[LoginResponse],
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate a staff member.
    Returns accessToken (15 min) and refreshToken (7 days).
    """
    result = auth_service.login(db, data)
    return success_response("Login successful", result)


# ─── POST /auth/refresh ───────────────────────────────────────────────────────
@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    summary="Get new access token using refresh token",
    response_model=SuccessResponse[RefreshResponse],
)
def refresh_token(data: RefreshTokenRequest, db: Session = Depends(get_db)):
    result = auth_service.refresh_token(db, data.refreshToken)
    return success_response("Token refreshed", result)


# ─── POST /auth/logout ────────────────────────────────────────────────────────
@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Revoke refresh token (logout)",
    response_model=SuccessResponse,
)
def logout(
    data: LogoutRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    auth_service.logout(db, data.refreshToken, current_user.id)
    return success_response("Logged out successfully", None)


# ─── GET /auth/me ─────────────────────────────────────────────────────────────
@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Get current authenticated user profile",
    response_model=SuccessResponse,
)
def get_me(current_user: User = Depends(get_current_user)):
    profile = serialize_user(current_user)
    profile["isActive"]  = current_user.isActive
    profile["createdAt"] = current_user.createdAt.isoformat() if current_user.createdAt else None
    return success_response("User profile retrieved", profile)
