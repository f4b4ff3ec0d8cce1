"""
Request Password Reset Use Case

Generates a password reset token and emails the reset link.
"""

import hashlib
import logging
import secrets
from datetime import timedelta

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.domain.entities import PasswordResetToken
from council_admin.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token
    - Hash token with SHA-256 before storing
    - Token expires in 1 hour
    - Earlier unused links for the account stop working
    - No email enumeration (same response for valid/invalid emails, and
      a failed send is only logged)
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        response = RequestPasswordResetResponse(
            status="sent",
            message="If the email exists, a password reset link has been sent",
        )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(response)

            superseded = await self.uow.password_reset_tokens.consume_pending_for_user(user.id)
            if superseded:
                logger.info(f"Superseded {superseded} open reset link(s) for {user.email}")

            reset_token = secrets.token_urlsafe(32)
            token_hash = hashlib.sha256(reset_token.encode()).hexdigest()

            password_reset_token = PasswordResetToken(
                user_id=user.id,
                token_hash=token_hash,
                used=False,
                expires_at=utcnow() + RESET_TOKEN_TTL,
            )
            await self.uow.password_reset_tokens.create(password_reset_token)

            await self.uow.commit()

        try:
            await self.email_sender.send_password_reset_email(user.email, user.name, reset_token)
        except EmailDeliveryError as e:
            logger.error(f"Password reset email to {user.email} failed: {e}")

        return Return.ok(response)
