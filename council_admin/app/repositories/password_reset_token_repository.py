from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from council_admin.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        pass

    @abstractmethod
    async def update(self, token: PasswordResetToken) -> PasswordResetToken:
        pass

    @abstractmethod
    async def consume_pending_for_user(self, user_id: UUID) -> int:
        """Mark every unused link of the account as used; returns how many were open"""
        pass
