"""
User Approval Use Case DTOs
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class ApprovalResponse(BaseModel):
    success: bool = True
    message: str
    user_id: str
    email_sent: bool


class AdminVerifyEmailResponse(BaseModel):
    success: bool = True
    message: str
    email_sent: bool = False


class PendingUser(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime


class PendingUsersResponse(BaseModel):
    users: List[PendingUser]
    total: int
