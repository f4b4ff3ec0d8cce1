"""
Admin Verify Email Use Case

Lets an administrator verify an address by hand or send a new link.
"""

import logging
import secrets
from uuid import UUID

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth.register_use_case import VERIFICATION_TOKEN_TTL
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import AdminVerifyEmailResponse

logger = logging.getLogger(__name__)

ACTIONS = ("verify", "resend")


class AdminVerifyEmailUseCase:
    """
    Use case for administrator-driven email verification.

    Business Rules:
    - verify: sets email_verified and clears any pending token; idempotent
    - resend: issues a new 24 hour token and emails it; send failure is an error
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, user_id: UUID, action: str) -> Result[AdminVerifyEmailResponse]:
        if action not in ACTIONS:
            return Return.err(
                Error("INVALID_ACTION", "Action must be one of: verify, resend")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if action == "verify":
                if user.email_verified:
                    return Return.ok(
                        AdminVerifyEmailResponse(message="Email is already verified")
                    )
                user.email_verified = True
                user.email_verification_token = None
                user.email_verification_expires_at = None
                await self.uow.users.update(user)
                await self.uow.commit()
                logger.info(f"Email of {user.email} verified by an administrator")
                return Return.ok(AdminVerifyEmailResponse(message="Email verified"))

            if user.email_verified:
                return Return.err(
                    Error("ALREADY_VERIFIED", "Email is already verified")
                )

            token = secrets.token_urlsafe(32)
            user.email_verification_token = token
            user.email_verification_expires_at = utcnow() + VERIFICATION_TOKEN_TTL
            user = await self.uow.users.update(user)
            await self.uow.commit()

        try:
            await self.email_sender.send_verification_email(user.email, user.name, token)
        except EmailDeliveryError as e:
            logger.error(f"Verification email to {user.email} failed: {e}")
            return Return.err(
                Error("EMAIL_SEND_FAILED", "Failed to send verification email")
            )

        return Return.ok(
            AdminVerifyEmailResponse(message="Verification email sent", email_sent=True)
        )
