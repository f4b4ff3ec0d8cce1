from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from council_admin.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from council_admin.api.error import ClientError
from council_admin.api.utils.client_ip import get_client_ip
from council_admin.api.utils.rate_limit import LimiterClass, RateLimiter
from council_admin.api.utils.session import SessionManager, SessionPayload
from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.encryption import Encryptor
from council_admin.app.services.oauth_client import OAuthClient
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.app.use_cases.auth.dtos import SessionUser
from council_admin.domain.entities import UserRole
from council_admin.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_bot_verifier(request: Request) -> BotVerifier:
    return request.app.state.bot_verifier


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_oauth_client(request: Request) -> OAuthClient:
    return request.app.state.oauth_client


def get_encryptor(request: Request) -> Encryptor:
    return request.app.state.encryptor


def rate_limit(limiter_class: LimiterClass):
    """
    Dependency factory that spends one request from the caller's budget.

    Runs before the endpoint body, so a limited request never reaches a
    password check or a write.
    """

    async def dependency(
        request: Request, limiter: RateLimiter = Depends(get_rate_limiter)
    ) -> None:
        if not limiter.consume(get_client_ip(request), limiter_class):
            raise ClientError(
                Error("RATE_LIMITED", "Too many requests. Please try again later."),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            )

    return dependency


async def get_current_session(
    request: Request, session_manager: SessionManager = Depends(get_session_manager)
) -> Optional[SessionPayload]:
    return session_manager.verify(request)


async def resolve_session_user(
    session: Optional[SessionPayload], uow: UnitOfWork
) -> Optional[SessionUser]:
    """
    Account behind a verified session, read fresh so role changes and
    deactivation apply before the cookie expires. None when there is no
    session, or the account is gone or can no longer log in.
    """
    if session is None:
        return None

    async with uow:
        try:
            user = await uow.users.get_by_id(UUID(session.user_id))
        except ValueError:
            user = None

        if user is None or not user.can_login:
            return None

        return SessionUser(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=UserRole(user.role).value,
        )


async def get_current_user(
    session: Optional[SessionPayload] = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SessionUser:
    """
    Raises:
        ClientError: 401 if there is no valid session, or the account is gone
            or can no longer log in
    """
    user = await resolve_session_user(session, uow)
    if user is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return user


def require_roles(*roles: UserRole):
    """Dependency factory: 401 without a usable session, 403 for other roles"""

    async def dependency(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if UserRole(user.role) not in roles:
            raise ClientError(
                Error("FORBIDDEN", "You do not have permission to perform this action"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return user

    return dependency


def get_config(request: Request):
    return request.app.state.config
