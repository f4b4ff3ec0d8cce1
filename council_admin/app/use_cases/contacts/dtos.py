"""
Contact Form Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from council_admin.domain.entities import InquiryType


class SubmitContactCommand(BaseModel):
    name: str = Field(..., max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    organization: Optional[str] = Field(default=None, max_length=200)
    inquiry_type: InquiryType
    message: str = Field(..., max_length=2000)
    recaptcha_token: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_is_meaningful(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("message")
    @classmethod
    def message_is_meaningful(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("Message must be at least 10 characters")
        return value

    @field_validator("phone", "organization")
    @classmethod
    def blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class SubmitContactResponse(BaseModel):
    success: bool = True
    message: str
    id: str
