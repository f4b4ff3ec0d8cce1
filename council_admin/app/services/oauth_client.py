from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class OAuthError(Exception):
    """OAuth provider returned an error or an unusable response"""


class OAuthTokens(BaseModel):
    """Token endpoint response of an authorization-code exchange"""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    token_type: Optional[str] = None


class OAuthClient(ABC):
    """Authorization-code OAuth provider interface - application layer"""

    @abstractmethod
    def build_authorize_url(self, client_id: str, redirect_uri: str, state: str) -> str:
        pass

    @abstractmethod
    async def exchange_code(
        self, client_id: str, client_secret: str, code: str, redirect_uri: str
    ) -> OAuthTokens:
        pass

    @abstractmethod
    async def fetch_user_email(self, access_token: str) -> str:
        pass
