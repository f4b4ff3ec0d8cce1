from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from pydantic import BaseModel, Field

from council_admin.api.error import ClientError, ServerError
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth import SessionUser
from council_admin.app.use_cases.users import (
    AdminVerifyEmailResponse,
    AdminVerifyEmailUseCase,
    ApprovalResponse,
    ApproveUserUseCase,
    ListPendingUsersUseCase,
    PendingUsersResponse,
    RejectUserUseCase,
)
from council_admin.depends import get_email_sender, get_unit_of_work, require_roles
from council_admin.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["User Approval"])

require_admin = require_roles(UserRole.ADMIN, UserRole.SUPER_ADMIN)


@router.get("/pending", status_code=status.HTTP_200_OK, response_model=PendingUsersResponse)
async def list_pending_users(
    uow: UnitOfWork = Depends(get_unit_of_work),
    admin: SessionUser = Depends(require_admin),
):
    """Verified accounts waiting for an approval decision"""
    result = await ListPendingUsersUseCase(uow).execute()
    if result.is_err():
        raise ServerError(result.error)
    return result.value


@router.post("/{user_id}/approve", status_code=status.HTTP_200_OK, response_model=ApprovalResponse)
async def approve_user(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_admin),
):
    """
    Approve a verified account (ADMIN, SUPER_ADMIN)

    Raises:
        - 400 Bad Request: Email not verified or already approved
        - 401 Unauthorized / 403 Forbidden: Caller is not an administrator
        - 404 Not Found: Unknown user
        - 409 Conflict: Account was rejected
    """
    use_case = ApproveUserUseCase(uow, email_sender)
    result = await use_case.execute(user_id, UUID(admin.id))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("EMAIL_NOT_VERIFIED", "ALREADY_APPROVED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "ACCOUNT_REJECTED":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class RejectRequest(BaseModel):
    reason: Optional[str] = Field(default=None, max_length=1000)


@router.delete("/{user_id}/approve", status_code=status.HTTP_200_OK, response_model=ApprovalResponse)
async def reject_user(
    user_id: UUID,
    request: Optional[RejectRequest] = Body(default=None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_admin),
):
    """
    Reject an account (ADMIN, SUPER_ADMIN). The record is kept.

    Raises:
        - 404 Not Found: Unknown user
    """
    use_case = RejectUserUseCase(uow, email_sender)
    result = await use_case.execute(
        user_id, UUID(admin.id), request.reason if request else None
    )

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class AdminVerifyEmailRequest(BaseModel):
    action: Literal["verify", "resend"]


@router.post(
    "/{user_id}/verify-email",
    status_code=status.HTTP_200_OK,
    response_model=AdminVerifyEmailResponse,
)
async def admin_verify_email(
    user_id: UUID,
    request: AdminVerifyEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
    admin: SessionUser = Depends(require_admin),
):
    """
    Verify an address by hand, or send a fresh verification link

    Raises:
        - 400 Bad Request: Resend for an already verified address
        - 404 Not Found: Unknown user
        - 500 Internal Server Error: Verification email could not be sent
    """
    use_case = AdminVerifyEmailUseCase(uow, email_sender)
    result = await use_case.execute(user_id, request.action)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVALID_ACTION", "ALREADY_VERIFIED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
