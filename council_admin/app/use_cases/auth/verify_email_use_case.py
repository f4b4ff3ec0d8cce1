"""
Verify Email Use Case

Redeems an email verification token.
"""

import hashlib
import logging

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must match a pending email_verification_token
    - Token must not be expired (24 hours from issue); an expired token
      changes nothing
    - Sets email_verified = True and clears the token (single-use)
    - Redeeming the same token again is an "already verified" success
    - Administrators are notified; a failed notification is only logged
    """

    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Errors:
            - INVALID_TOKEN: Token not found
            - TOKEN_EXPIRED: Token has expired
        """
        if not token:
            return Return.err(Error("INVALID_TOKEN", "Verification token is required"))

        token_hash = hash_token(token)

        async with self.uow:
            user = await self.uow.users.get_by_verification_token(token)

            if user is None:
                redeemed = await self.uow.users.get_by_redeemed_token_hash(token_hash)
                if redeemed is not None and redeemed.email_verified:
                    return Return.ok(
                        VerifyEmailResponse(
                            message="Email is already verified",
                            already_verified=True,
                        )
                    )
                return Return.err(
                    Error("INVALID_TOKEN", "Invalid or non-existent verification token")
                )

            if (
                user.email_verification_expires_at is None
                or utcnow() > user.email_verification_expires_at
            ):
                return Return.err(
                    Error(
                        "TOKEN_EXPIRED",
                        "Verification token has expired. Please request a new verification email.",
                    )
                )

            user.email_verified = True
            user.email_verification_token = None
            user.email_verification_expires_at = None
            user.redeemed_verification_token_hash = token_hash
            user = await self.uow.users.update(user)

            await self.uow.commit()

        logger.info(f"Email verified: {user.email}")

        try:
            await self.email_sender.send_new_registration_notification(user.name, user.email)
        except EmailDeliveryError as e:
            logger.error(f"Admin notification for {user.email} failed: {e}")

        return Return.ok(
            VerifyEmailResponse(
                message="Email verified successfully. Your account is now awaiting administrator approval."
            )
        )
