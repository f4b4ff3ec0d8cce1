"""
Register Use Case

Creates an unverified, unapproved account and sends the verification email.
"""

import logging
import secrets
from datetime import timedelta

from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.password_hasher import hash_password_async
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.domain.entities import RegistrationState, User, UserRole
from council_admin.libs.result import Error, Result, Return
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

VERIFICATION_TOKEN_TTL = timedelta(hours=24)


class RegisterUseCase:
    """
    Use case for self-service account registration.

    Business Rules:
    - Bot score is checked before anything is written
    - A duplicate email answers with a generic error so existence is not revealed
    - A rejected account may register again; its record restarts as UNVERIFIED
    - New accounts are EDITOR, inactive, unverified and unapproved
    - Verification token is single-use and expires after 24 hours
    - A failed verification email does not fail the registration
    """

    def __init__(self, uow: UnitOfWork, bot_verifier: BotVerifier, email_sender: EmailSender):
        self.uow = uow
        self.bot_verifier = bot_verifier
        self.email_sender = email_sender

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        verification = await self.bot_verifier.verify(command.recaptcha_token, "register")
        if not verification.success:
            logger.warning(
                f"Registration bot check failed for {command.email}: {verification.error}"
            )
            return Return.err(
                Error("BOT_VERIFICATION_FAILED", "Bot verification failed. Please try again.")
            )

        password_hash = await hash_password_async(command.password)
        token = secrets.token_urlsafe(32)
        expires_at = utcnow() + VERIFICATION_TOKEN_TTL

        async with self.uow:
            existing = await self.uow.users.get_by_email(command.email)

            if existing is not None:
                if existing.registration_state != RegistrationState.REJECTED:
                    return Return.err(
                        Error("REGISTRATION_FAILED", "Unable to create account")
                    )
                user = self._restart_registration(existing, command, password_hash)
                user.email_verification_token = token
                user.email_verification_expires_at = expires_at
                user = await self.uow.users.update(user)
                logger.info(f"Rejected account re-registered: {user.email}")
            else:
                user = User(
                    name=command.name,
                    email=command.email,
                    password_hash=password_hash,
                    role=UserRole.EDITOR,
                    active=False,
                    email_verified=False,
                    approved=False,
                    email_verification_token=token,
                    email_verification_expires_at=expires_at,
                )
                user = await self.uow.users.create(user)
                logger.info(f"Account registered: {user.email}")

            await self.uow.commit()

        email_sent = True
        email_error = None
        try:
            await self.email_sender.send_verification_email(user.email, user.name, token)
        except EmailDeliveryError as e:
            logger.error(f"Verification email to {user.email} failed: {e}")
            email_sent = False
            email_error = str(e)

        if email_sent:
            message = "Registration successful. Please check your email to verify your account."
        else:
            message = (
                "Registration successful, but the verification email could not be sent. "
                "Please request a new verification email."
            )

        return Return.ok(
            RegisterResponse(
                message=message,
                user_id=str(user.id),
                email_sent=email_sent,
                email_error=email_error,
            )
        )

    @staticmethod
    def _restart_registration(user: User, command: RegisterCommand, password_hash: str) -> User:
        user.name = command.name
        user.password_hash = password_hash
        user.role = UserRole.EDITOR
        user.active = False
        user.email_verified = False
        user.redeemed_verification_token_hash = None
        user.approved = False
        user.approved_by_id = None
        user.approved_at = None
        user.rejection_reason = None
        user.rejected_at = None
        return user
