"""
User Approval Use Cases

Administrator decisions over registered accounts.
"""

from .approve_user_use_case import ApproveUserUseCase
from .reject_user_use_case import RejectUserUseCase
from .admin_verify_email_use_case import AdminVerifyEmailUseCase
from .list_pending_users_use_case import ListPendingUsersUseCase
from .dtos import (
    ApprovalResponse,
    AdminVerifyEmailResponse,
    PendingUser,
    PendingUsersResponse,
)

__all__ = [
    "ApproveUserUseCase",
    "RejectUserUseCase",
    "AdminVerifyEmailUseCase",
    "ListPendingUsersUseCase",
    "ApprovalResponse",
    "AdminVerifyEmailResponse",
    "PendingUser",
    "PendingUsersResponse",
]
