import logging
from sqlalchemy.orm import Session

from room_booking.config import settings
from room_booking.models.user import User
from room_booking.models.role import Role, RoleName
from room_booking.models.refresh_token import RefreshToken
from room_booking.schemas.auth import LoginRequest
from room_booking.utils.security import (
    verify_password, hash_password,
    create_access_token, create_refresh_token, verify_refresh_token,
)
from room_booking.utils.audit import log_action
from room_booking.utils.exceptions import (
    UnauthorizedException, AccountInactiveException,
    DuplicateEntryException, RefreshTokenInvalidException,
)

logger = logging.getLogger(__name__)


def serialize_user(user: User) -> dict:
    return {
        "id":    user.id,
        "name":  user.name,
        "email": user.email,
        "role":  user.role.name.value,
    }


class AuthService:

    # ─── Login ────────────────────────────────────────────────────────────────
    def login(self, db: Session, data: LoginRequest) -> dict:
        user = db.query(User).filter(User.email == data.email).first()

        if not user or not verify_password(data.password, user.password):
            logger.info(f"Failed login for {data.email}")
            raise UnauthorizedException("Invalid email or password")

        if not user.isActive:
            raise AccountInactiveException()

        access_token = create_access_token(user.id, user.role.name.value)
        refresh_token_str, refresh_expires = create_refresh_token(user.id)

        db.add(RefreshToken(
            userId=user.id,
            token=refresh_token_str,
            expiresAt=refresh_expires,
            revoked=False,
        ))
        log_action(db, user.id, "LOGIN", "User", user.id, f"{user.name} logged in")
        db.commit()

        return {
            "accessToken":  access_token,
            "refreshToken": refresh_token_str,
            "tokenType":    "Bearer",
            "expiresIn":    settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user":         serialize_user(user),
        }

    # ─── Refresh Token ────────────────────────────────────────────────────────
    def refresh_token(self, db: Session, refresh_token_str: str) -> dict:
        payload = verify_refresh_token(refresh_token_str)
        user_id = int(payload.get("sub"))

        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
            RefreshToken.revoked == False,
        ).first()

        if not stored:
            raise RefreshTokenInvalidException()

        if stored.is_expired:
            stored.revoked = True
            db.commit()
            raise RefreshTokenInvalidException()

        user = db.query(User).filter(User.id == user_id).first()
        if not user or not user.isActive:
            raise AccountInactiveException()

        return {
            "accessToken": create_access_token(user.id, user.role.name.value),
            "expiresIn":   settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        }

    # ─── Logout ───────────────────────────────────────────────────────────────
    def logout(self, db: Session, refresh_token_str: str, user_id: int) -> None:
        stored = db.query(RefreshToken).filter(
            RefreshToken.token == refresh_token_str,
            RefreshToken.userId == user_id,
        ).first()
        if stored:
            stored.revoked = True

        log_action(db, user_id, "LOGOUT", "User", user_id, "User logged out")
        db.commit()

    # ─── Provisioning ─────────────────────────────────────────────────────────
    def ensure_roles(self, db: Session) -> dict[RoleName, Role]:
        roles = {r.name: r for r in db.query(Role).all()}
        for name in RoleName:
            if name not in roles:
                roles[name] = Role(name=name)
                db.add(roles[name])
        db.flush()
        return roles

    def create_user(
        self, db: Session, name: str, email: str, password: str, role: RoleName = RoleName.STAFF,
    ) -> User:
        if db.query(User).filter(User.email == email).first():
            raise DuplicateEntryException("Email already registered", field="email")

        roles = self.ensure_roles(db)
        user = User(
            name=name,
            email=email,
            password=hash_password(password),
            isActive=True,
            roleId=roles[role].id,
        )
        db.add(user)
        db.flush()
        log_action(db, None, "CREATE", "User", user.id, f"Provisioned {role.value} user {email}")
        db.commit()
        db.refresh(user)
        return user


auth_service = AuthService()
