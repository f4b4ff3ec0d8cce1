"""
Settings Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel, Field


class UpdateRecaptchaSettingsCommand(BaseModel):
    """
    reCAPTCHA configuration change. A missing secret_key keeps the stored one
    so the admin form never has to echo the secret back.
    """

    enabled: bool
    site_key: Optional[str] = Field(default=None, max_length=200)
    secret_key: Optional[str] = Field(default=None, max_length=200)
    threshold: float = Field(default=0.5, ge=0.0, le=1.0)


class RecaptchaSettingsResponse(BaseModel):
    success: bool = True
    enabled: bool
    site_key: Optional[str] = None
    secret_key_configured: bool
    threshold: float


class InvalidateCachesResponse(BaseModel):
    success: bool = True
    message: str
