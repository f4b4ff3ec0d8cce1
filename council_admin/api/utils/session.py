"""
Signed session cookie issue and verification.

Sessions are stateless HS256 JWTs. A token is valid only while both the
protocol-level ``exp`` claim and the embedded ``expires_at`` are in the future.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Union
from uuid import UUID

from fastapi import Request, Response
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ValidationError

SESSION_COOKIE = "session"
SESSION_DURATION = timedelta(days=7)
MIN_SECRET_LENGTH = 32
ALGORITHM = "HS256"


class SessionStatus(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"
    MISSING = "missing"


class SessionPayload(BaseModel):
    user_id: str
    email: str
    role: str
    expires_at: datetime


class SessionCheck(BaseModel):
    status: SessionStatus
    payload: Optional[SessionPayload] = None


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    def __init__(
        self,
        secret: Optional[str],
        secure: bool = False,
        duration: timedelta = SESSION_DURATION,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            secret: HS256 signing secret, at least 32 characters
            secure: Set the Secure cookie flag (production)
            duration: Session lifetime
            clock: Returns timezone-aware "now"; injectable for tests

        Raises:
            ValueError: Secret missing or too short
        """
        if not secret or len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be set and at least {MIN_SECRET_LENGTH} characters long"
            )
        self._secret = secret
        self.secure = secure
        self.duration = duration
        self.clock = clock

    def create_token(self, user_id: Union[str, UUID], email: str, role: str) -> str:
        now = self.clock()
        expires_at = now + self.duration
        payload = {
            "user_id": str(user_id),
            "email": email,
            "role": role,
            "expires_at": expires_at.isoformat(),
            "iat": now,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def inspect(self, token: Optional[str]) -> SessionCheck:
        """Classify a token without raising"""
        if not token:
            return SessionCheck(status=SessionStatus.MISSING)

        try:
            claims = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            # jose checks the signature before the claims
            return SessionCheck(status=SessionStatus.EXPIRED)
        except JWTError:
            return SessionCheck(status=SessionStatus.INVALID)

        try:
            payload = SessionPayload(**claims)
        except (ValidationError, TypeError):
            return SessionCheck(status=SessionStatus.INVALID)

        if payload.expires_at.tzinfo is None or payload.expires_at < self.clock():
            return SessionCheck(status=SessionStatus.EXPIRED, payload=payload)

        return SessionCheck(status=SessionStatus.VALID, payload=payload)

    def verify(self, request: Request) -> Optional[SessionPayload]:
        check = self.inspect(request.cookies.get(SESSION_COOKIE))
        if check.status != SessionStatus.VALID:
            return None
        return check.payload

    def issue(self, response: Response, user_id: Union[str, UUID], email: str, role: str) -> str:
        token = self.create_token(user_id, email, role)
        response.set_cookie(
            key=SESSION_COOKIE,
            value=token,
            httponly=True,
            secure=self.secure,
            samesite="lax",
            path="/",
            expires=self.clock() + self.duration,
        )
        return token

    def destroy(self, response: Response) -> None:
        response.delete_cookie(SESSION_COOKIE, path="/")
