"""Pydantic schemas for sign-up, sign-in, and session lookup."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from goodeats.schemas.user import UserOut

BCRYPT_MAX_BYTES = 72


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=2, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=150)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
        return value


class SignInRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserOut


class SessionOut(BaseModel):
    session_id: str
    expires_at: datetime
    user: UserOut
