"""
Reject User Use Case

Refuses an account. The record is kept so the decision is auditable.
"""

import logging
from typing import Optional
from uuid import UUID

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import ApprovalResponse

logger = logging.getLogger(__name__)


class RejectUserUseCase:
    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(
        self, user_id: UUID, rejected_by_id: UUID, reason: Optional[str] = None
    ) -> Result[ApprovalResponse]:
        reason = reason.strip() if reason else None

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.approved = False
            user.active = False
            user.rejection_reason = reason or None
            user.rejected_at = utcnow()
            user = await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"User {user.email} rejected by {rejected_by_id}")

        email_sent = True
        try:
            await self.email_sender.send_account_rejected_email(
                user.email, user.name, user.rejection_reason
            )
        except EmailDeliveryError as e:
            logger.error(f"Rejection email to {user.email} failed: {e}")
            email_sent = False

        return Return.ok(
            ApprovalResponse(
                message="User rejected",
                user_id=str(user.id),
                email_sent=email_sent,
            )
        )
