from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, field_validator

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v


class RegisterResponse(BaseModel):
    user_id: UUID
    email: str
    user_type: str
    created_at: datetime


class LoginRequest(BaseModel):
    """Credentials are not validated here: every bad login is the same 401."""

    email: str
    password: str


class SessionUser(BaseModel):
    id: UUID
    email: str
    type: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    user: SessionUser


class MessageResponse(BaseModel):
    message: str


class LogoutAllResponse(MessageResponse):
    revoked: int
