"""
Complete Gmail OAuth Use Case

Validates the callback state, exchanges the code and stores the
credential set.
"""

import json
import logging
import secrets
from datetime import datetime
from typing import Optional

from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.encryption import Encryptor
from council_admin.app.services.oauth_client import OAuthClient, OAuthError
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Error, Result, Return
from .dtos import GMAIL_OAUTH_STATE_KEY, GmailConnectedResponse

logger = logging.getLogger(__name__)


class CompleteGmailOAuthUseCase:
    """
    Business Rules:
    - Provider error, missing code or state, unknown state are refused
    - A mismatched or expired state is deleted
    - A grant without a refresh token stores nothing
    - Client secret and refresh token are stored encrypted
    - The cached Gmail credentials are dropped after a successful connect
    """

    def __init__(
        self,
        uow: UnitOfWork,
        oauth_client: OAuthClient,
        encryptor: Encryptor,
        email_sender: EmailSender,
        redirect_uri: str,
    ):
        self.uow = uow
        self.oauth_client = oauth_client
        self.encryptor = encryptor
        self.email_sender = email_sender
        self.redirect_uri = redirect_uri

    async def execute(
        self, code: Optional[str], state: Optional[str], error: Optional[str] = None
    ) -> Result[GmailConnectedResponse]:
        """
        Errors:
            - PROVIDER_ERROR
            - MISSING_PARAMS
            - INVALID_STATE
            - STATE_MISMATCH
            - EXCHANGE_FAILED
            - NO_REFRESH_TOKEN
        """
        if error:
            logger.warning(f"Gmail OAuth provider returned error: {error}")
            return Return.err(Error("PROVIDER_ERROR", error))

        if not code or not state:
            return Return.err(Error("MISSING_PARAMS", "Authorization code and state are required"))

        async with self.uow:
            stored = await self.uow.settings.get(GMAIL_OAUTH_STATE_KEY)
            if stored is None:
                return Return.err(Error("INVALID_STATE", "No pending Gmail authorization"))

            try:
                pending = json.loads(stored)
                expires_at = datetime.fromisoformat(pending["expires_at"])
                client_id = pending["client_id"]
                client_secret = self.encryptor.decrypt(pending["client_secret"])
                expected_state = pending["state"]
            except (ValueError, KeyError, TypeError):
                await self.uow.settings.delete(GMAIL_OAUTH_STATE_KEY)
                await self.uow.commit()
                return Return.err(Error("INVALID_STATE", "Pending Gmail authorization is unreadable"))

            if not secrets.compare_digest(expected_state, state) or utcnow() > expires_at:
                await self.uow.settings.delete(GMAIL_OAUTH_STATE_KEY)
                await self.uow.commit()
                return Return.err(
                    Error("STATE_MISMATCH", "Authorization state does not match or has expired")
                )

            try:
                tokens = await self.oauth_client.exchange_code(
                    client_id, client_secret, code, self.redirect_uri
                )
            except OAuthError as e:
                return Return.err(Error("EXCHANGE_FAILED", str(e)))

            if not tokens.refresh_token:
                return Return.err(
                    Error(
                        "NO_REFRESH_TOKEN",
                        "Google did not return a refresh token. Remove the app's access and try again.",
                    )
                )

            try:
                connected_email = await self.oauth_client.fetch_user_email(tokens.access_token)
            except OAuthError as e:
                return Return.err(Error("EXCHANGE_FAILED", str(e)))

            await self.uow.settings.upsert("gmail_client_id", client_id)
            await self.uow.settings.upsert(
                "gmail_client_secret", self.encryptor.encrypt(client_secret)
            )
            await self.uow.settings.upsert(
                "gmail_refresh_token", self.encryptor.encrypt(tokens.refresh_token)
            )
            await self.uow.settings.upsert("gmail_connected_email", connected_email)
            await self.uow.settings.upsert("gmail_connected_at", utcnow().isoformat())
            await self.uow.settings.delete(GMAIL_OAUTH_STATE_KEY)
            await self.uow.commit()

        self.email_sender.invalidate()
        logger.info(f"Gmail connected as {connected_email}")

        return Return.ok(GmailConnectedResponse(connected_email=connected_email))
