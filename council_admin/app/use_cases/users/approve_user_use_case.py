"""
Approve User Use Case

Admits a verified account to the admin area.
"""

import logging
from uuid import UUID

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.domain.entities import RegistrationState
from council_admin.libs.result import Error, Result, Return
from .dtos import ApprovalResponse

logger = logging.getLogger(__name__)


class ApproveUserUseCase:
    """
    Use case for approving a pending account.

    Business Rules:
    - Only verified accounts can be approved
    - Rejection is terminal; a rejected account must register again
    - Approval activates the account and records who approved it and when
    - Approval email failure is logged and does not undo the approval
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, user_id: UUID, approver_id: UUID) -> Result[ApprovalResponse]:
        """
        Errors:
            - USER_NOT_FOUND
            - EMAIL_NOT_VERIFIED
            - ALREADY_APPROVED
            - ACCOUNT_REJECTED
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            state = user.registration_state
            if not user.email_verified:
                return Return.err(
                    Error(
                        "EMAIL_NOT_VERIFIED",
                        "User must verify their email before approval",
                    )
                )
            if state == RegistrationState.APPROVED:
                return Return.err(Error("ALREADY_APPROVED", "User is already approved"))
            if state == RegistrationState.REJECTED:
                return Return.err(
                    Error(
                        "ACCOUNT_REJECTED",
                        "Account was rejected and must register again",
                    )
                )

            user.approved = True
            user.active = True
            user.approved_by_id = approver_id
            user.approved_at = utcnow()
            user.rejection_reason = None
            user.rejected_at = None
            user = await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"User {user.email} approved by {approver_id}")

        email_sent = True
        try:
            await self.email_sender.send_account_approved_email(user.email, user.name)
        except EmailDeliveryError as e:
            logger.error(f"Approval email to {user.email} failed: {e}")
            email_sent = False

        return Return.ok(
            ApprovalResponse(
                message="User approved successfully",
                user_id=str(user.id),
                email_sent=email_sent,
            )
        )
