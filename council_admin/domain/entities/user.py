"""
User Entity

Represents an administrative account of the council dashboard.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import RegistrationState, UserRole


class User(SQLModel, table=True):
    """
    User entity - an account that may sign in to the admin area.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash (cost factor 12)
    - Login requires active, email_verified and approved to all hold
    - Registration starts inactive, unverified and unapproved
    - Approval forces active=True; rejection forces active=False
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    role: UserRole = Field(default=UserRole.EDITOR)
    active: bool = Field(default=False)

    # Email verification
    email_verified: bool = Field(default=False)
    email_verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )
    email_verification_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    redeemed_verification_token_hash: Optional[str] = Field(
        default=None, index=True, max_length=64
    )

    # Approval
    approved: bool = Field(default=False)
    approved_by_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    approved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)
    rejected_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_approval", "email_verified", "approved"),)

    @property
    def registration_state(self) -> RegistrationState:
        if self.rejected_at is not None:
            return RegistrationState.REJECTED
        if self.approved:
            return RegistrationState.APPROVED
        if self.email_verified:
            return RegistrationState.VERIFIED_PENDING_APPROVAL
        return RegistrationState.UNVERIFIED

    @property
    def can_login(self) -> bool:
        return self.active and self.email_verified and self.approved
