from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from council_admin.app.repositories.user_repository import IUserRepository
from council_admin.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (case-insensitive)"""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get user by pending email verification token"""
        stmt = select(User).where(User.email_verification_token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_redeemed_token_hash(self, token_hash: str) -> Optional[User]:
        stmt = select(User).where(User.redeemed_verification_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.first()

    async def list_pending_approval(self) -> List[User]:
        stmt = (
            select(User)
            .where(
                User.email_verified == True,  # noqa: E712
                User.approved == False,  # noqa: E712
                User.rejected_at == None,  # noqa: E711
            )
            .order_by(User.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
