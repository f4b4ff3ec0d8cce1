"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import hashlib
import logging

from council_admin.app.services.password_hasher import hash_password_async
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse, validate_password_strength

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Token must not be expired (1 hour window)
    - Token must not already be used
    - New password must meet the registration password rule
    - Password is hashed with bcrypt (cost factor 12)
    - Token is marked as used after successful reset

    Sessions are stateless signed cookies, so existing sessions are not
    revoked and expire naturally.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - INVALID_TOKEN: Token not found or invalid
            - TOKEN_EXPIRED: Token has expired
            - TOKEN_ALREADY_USED: Token has already been used
        """
        try:
            validate_password_strength(new_password)
        except ValueError as e:
            return Return.err(Error("INVALID_PASSWORD", str(e)))

        token_hash = hashlib.sha256(token.encode()).hexdigest()

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(token_hash)

            if reset_token is None:
                return Return.err(
                    Error("INVALID_TOKEN", "Invalid or expired password reset token")
                )

            if reset_token.is_expired():
                return Return.err(Error("TOKEN_EXPIRED", "Password reset token has expired"))

            if reset_token.used:
                return Return.err(
                    Error("TOKEN_ALREADY_USED", "Password reset token has already been used")
                )

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.password_hash = await hash_password_async(new_password)
            await self.uow.users.update(user)

            reset_token.consume()
            await self.uow.password_reset_tokens.update(reset_token)

            await self.uow.commit()

        logger.info(f"Password reset completed for {user.email}")

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
