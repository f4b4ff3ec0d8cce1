"""
Contact Entity

Public contact form submission.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, Text

from ..base import utcnow
from .enums import ContactStatus, InquiryType


class Contact(SQLModel, table=True):
    __tablename__ = "contacts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, index=True)
    phone: Optional[str] = Field(default=None, max_length=50)
    organization: Optional[str] = Field(default=None, max_length=200)
    inquiry_type: InquiryType
    message: str = Field(sa_column=Column(Text, nullable=False))

    ip_address: str = Field(default="unknown", max_length=64)
    user_agent: str = Field(default="unknown", max_length=500)
    status: ContactStatus = Field(default=ContactStatus.NEW)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
