"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

import re
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 8
# bcrypt only accepts 72 bytes of input
PASSWORD_MAX_BYTES = 72


def validate_password_strength(password: str) -> str:
    """Registration password rule, shared with password reset"""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain a lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain a number")
    return password


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Registration command - validated registration intent.

    The API layer builds it straight from the request body, so validation
    errors surface as 400 VALIDATION_ERROR before any bot check or write.
    """

    name: str = Field(..., max_length=100)
    email: EmailStr
    password: str
    recaptcha_token: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_is_meaningful(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, value: str) -> str:
        return validate_password_strength(value)


# ============================================================================
# Response DTOs
# ============================================================================


class SessionUser(BaseModel):
    """Account identity carried in login and session responses"""

    id: str
    email: str
    name: str
    role: str


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    user_id: str
    email_sent: bool
    email_error: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    user: SessionUser


class VerifyEmailResponse(BaseModel):
    success: bool = True
    message: str
    already_verified: bool = False


class ResendVerificationResponse(BaseModel):
    success: bool = True
    message: str
    already_verified: bool = False


class RequestPasswordResetResponse(BaseModel):
    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    status: str
    message: str
