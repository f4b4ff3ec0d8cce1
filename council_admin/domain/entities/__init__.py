"""
Council Admin Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import (
    UserRole,
    RegistrationState,
    InquiryType,
    ContactStatus,
)

from .user import User
from .setting import Setting
from .password_reset_token import PasswordResetToken
from .contact import Contact

__all__ = [
    # Enums
    "UserRole",
    "RegistrationState",
    "InquiryType",
    "ContactStatus",
    # Entities
    "User",
    "Setting",
    "PasswordResetToken",
    "Contact",
]
