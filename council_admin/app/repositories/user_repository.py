from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from council_admin.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get user by pending email verification token"""
        pass

    @abstractmethod
    async def get_by_redeemed_token_hash(self, token_hash: str) -> Optional[User]:
        """Get user whose verification token with this hash was already redeemed"""
        pass

    @abstractmethod
    async def list_pending_approval(self) -> List[User]:
        """Get verified users still waiting for an approval decision"""
        pass
