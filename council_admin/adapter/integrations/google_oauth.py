"""
Google OAuth 2.0 authorization-code flow for the Gmail connection.
"""

import logging
from urllib.parse import urlencode

import httpx

from council_admin.app.services.oauth_client import OAuthClient, OAuthError, OAuthTokens

logger = logging.getLogger(__name__)

GMAIL_SCOPES = [
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/userinfo.email",
]


class GoogleOAuthClient(OAuthClient):
    """Google OAuth 2.0 implementation."""

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    def build_authorize_url(self, client_id: str, redirect_uri: str, state: str) -> str:
        """
        Consent screen URL. Offline access with a forced consent prompt so
        Google hands out a refresh token even on reconnect.
        """
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(GMAIL_SCOPES),
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(
        self, client_id: str, client_secret: str, code: str, redirect_uri: str
    ) -> OAuthTokens:
        data = await self._token_request(
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            }
        )
        return OAuthTokens(**data)

    async def refresh_access_token(
        self, client_id: str, client_secret: str, refresh_token: str
    ) -> str:
        data = await self._token_request(
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            }
        )
        return data["access_token"]

    async def fetch_user_email(self, access_token: str) -> str:
        try:
            response = await self.http_client.get(
                self.USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            raise OAuthError(f"Userinfo request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Google userinfo failed: {response.status_code}")
            raise OAuthError(f"Failed to get user info: {response.status_code}")

        return response.json().get("email", "")

    async def _token_request(self, form: dict) -> dict:
        try:
            response = await self.http_client.post(self.TOKEN_URL, data=form)
        except httpx.HTTPError as e:
            raise OAuthError(f"Token request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.status_code != 200 or "access_token" not in data:
            message = data.get("error_description") or data.get("error") or (
                f"Token request failed: {response.status_code}"
            )
            logger.error(f"Google token request failed ({response.status_code}): {message}")
            raise OAuthError(message)

        return data
