"""
Resend Verification Email Use Case

Issues a fresh verification token and sends it again.
"""

import logging
import secrets

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import ResendVerificationResponse
from .register_use_case import VERIFICATION_TOKEN_TTL

logger = logging.getLogger(__name__)

SENT_MESSAGE = "If an account exists with this email, a verification link has been sent"


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - Unknown email answers exactly like a successful send (no enumeration)
    - Already verified answers with already_verified and sends nothing
    - New token replaces the old one and its expiry restarts at 24 hours
    - A failed send is reported as EMAIL_SEND_FAILED
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, email: str) -> Result[ResendVerificationResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(ResendVerificationResponse(message=SENT_MESSAGE))

            if user.email_verified:
                return Return.ok(
                    ResendVerificationResponse(
                        message="Email is already verified", already_verified=True
                    )
                )

            token = secrets.token_urlsafe(32)
            user.email_verification_token = token
            user.email_verification_expires_at = utcnow() + VERIFICATION_TOKEN_TTL
            user = await self.uow.users.update(user)

            await self.uow.commit()

        try:
            await self.email_sender.send_verification_email(user.email, user.name, token)
        except EmailDeliveryError as e:
            logger.error(f"Verification email resend to {user.email} failed: {e}")
            return Return.err(
                Error("EMAIL_SEND_FAILED", "Failed to send verification email")
            )

        return Return.ok(ResendVerificationResponse(message=SENT_MESSAGE))
