"""
Start Gmail OAuth Use Case

Stores a CSRF state and returns the Google consent URL.
"""

import json
import logging
import secrets
from datetime import timedelta

from council_admin.app.services.encryption import Encryptor
from council_admin.app.services.oauth_client import OAuthClient
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.base import utcnow
from council_admin.libs.result import Result, Return
from .dtos import GMAIL_OAUTH_STATE_KEY, GmailAuthResponse, StartGmailOAuthCommand

logger = logging.getLogger(__name__)

STATE_TTL = timedelta(minutes=10)


class StartGmailOAuthUseCase:
    """
    Business Rules:
    - State is 32 random bytes, hex encoded
    - Only one pending authorization exists; starting again overwrites it
    - Client secret is stored encrypted and the pending state expires in 10 minutes
    """

    def __init__(
        self,
        uow: UnitOfWork,
        oauth_client: OAuthClient,
        encryptor: Encryptor,
        redirect_uri: str,
    ):
        self.uow = uow
        self.oauth_client = oauth_client
        self.encryptor = encryptor
        self.redirect_uri = redirect_uri

    async def execute(self, command: StartGmailOAuthCommand) -> Result[GmailAuthResponse]:
        state = secrets.token_hex(32)
        pending = {
            "state": state,
            "client_id": command.client_id,
            "client_secret": self.encryptor.encrypt(command.client_secret),
            "expires_at": (utcnow() + STATE_TTL).isoformat(),
        }

        async with self.uow:
            await self.uow.settings.upsert(GMAIL_OAUTH_STATE_KEY, json.dumps(pending))
            await self.uow.commit()

        logger.info("Gmail OAuth flow started")

        auth_url = self.oauth_client.build_authorize_url(
            command.client_id, self.redirect_uri, state
        )
        return Return.ok(GmailAuthResponse(auth_url=auth_url))
