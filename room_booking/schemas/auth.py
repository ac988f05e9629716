from pydantic import BaseModel, EmailStr


# ─── Request Schemas ──────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email:    EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    refreshToken: str


class LogoutRequest(BaseModel):
    refreshToken: str


# ─── Response Schemas ─────────────────────────────────────────────────────────
class UserInToken(BaseModel):
    id:    int
    name:  str
    email: str
    role:  str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    accessToken:  str
    refreshToken: str
    tokenType:    str = "Bearer"
    expiresIn:    int          # seconds
    user:         UserInToken


class RefreshResponse(BaseModel):
    accessToken: str
    expiresIn:   int
