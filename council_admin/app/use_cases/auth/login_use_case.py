"""
Login Use Case

Checks credentials and the approval gates before a session may be issued.
"""

import logging

from council_admin.app.services.password_hasher import (
    burn_verification_async,
    verify_password_async,
)
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import LoginResponse, SessionUser

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Password is checked first; an unknown email still pays for a bcrypt check
    - Gates after the password, in order: email verified, approval decided,
      account active and approved
    - Only active, verified and approved accounts get a session
    - Updates user.last_login_at

    The session cookie itself is issued by the API layer.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await burn_verification_async(password)
                logger.info(f"Login failed for unknown account {email}")
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not await verify_password_async(password, user.password_hash):
                logger.info(f"Login failed for {user.email}: bad password")
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not user.email_verified:
                return Return.err(
                    Error(
                        "EMAIL_NOT_VERIFIED",
                        "Please verify your email address before logging in",
                    )
                )

            if user.rejected_at is None and not user.approved:
                return Return.err(
                    Error(
                        "PENDING_APPROVAL",
                        "Your account is awaiting administrator approval",
                    )
                )

            if not user.can_login:
                return Return.err(
                    Error("ACCOUNT_DEACTIVATED", "Your account has been deactivated")
                )

            user.last_login_at = utcnow()
            await self.uow.users.update(user)
            await self.uow.commit()

            logger.info(f"Login succeeded for {user.email}")

            return Return.ok(
                LoginResponse(
                    user=SessionUser(
                        id=str(user.id),
                        email=user.email,
                        name=user.name,
                        role=user.role.value,
                    )
                )
            )
