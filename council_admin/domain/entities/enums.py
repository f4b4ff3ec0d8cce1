"""
Council Admin Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Administrative role of an account"""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class RegistrationState(str, Enum):
    """Account lifecycle state, derived from the account flags"""

    UNVERIFIED = "UNVERIFIED"
    VERIFIED_PENDING_APPROVAL = "VERIFIED_PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class InquiryType(str, Enum):
    """Contact form inquiry category"""

    HOSTING_EVENT = "HOSTING_EVENT"
    PARTNERSHIP = "PARTNERSHIP"
    GENERAL_INQUIRY = "GENERAL_INQUIRY"
    MEDIA = "MEDIA"


class ContactStatus(str, Enum):
    """Contact submission triage status"""

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
