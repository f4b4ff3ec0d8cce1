"""In-memory stand-ins for the outbound services"""

from typing import List, Optional, Tuple

from council_admin.app.services.bot_verifier import (
    BotConfigurationStatus,
    BotVerification,
    BotVerifier,
)
from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.oauth_client import OAuthClient, OAuthError, OAuthTokens


class RecordingEmailSender(EmailSender):
    """Collects outgoing mail instead of sending it"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Tuple[str, tuple]] = []
        self.invalidations = 0

    async def _record(self, kind: str, *args) -> None:
        if self.fail:
            raise EmailDeliveryError("Gmail credentials not configured")
        self.sent.append((kind, args))

    async def send_verification_email(self, email, name, token):
        await self._record("verification", email, name, token)

    async def send_account_approved_email(self, email, name):
        await self._record("approved", email, name)

    async def send_account_rejected_email(self, email, name, reason=None):
        await self._record("rejected", email, name, reason)

    async def send_new_registration_notification(self, name, email):
        await self._record("new_registration", name, email)

    async def send_password_reset_email(self, email, name, token):
        await self._record("password_reset", email, name, token)

    async def send_test_email(self, email):
        await self._record("test", email)

    async def send_contact_notification(self, contact):
        await self._record("contact", contact)

    def invalidate(self) -> None:
        self.invalidations += 1

    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.sent]

    def last(self, kind: str) -> tuple:
        return [args for sent_kind, args in self.sent if sent_kind == kind][-1]


class StaticBotVerifier(BotVerifier):
    def __init__(self, success: bool = True, error: Optional[str] = None):
        self.success = success
        self.error = error
        self.calls: List[Tuple[Optional[str], Optional[str]]] = []
        self.invalidations = 0
        self.status = BotConfigurationStatus(
            success=True, status="configured", message="reCAPTCHA is configured correctly"
        )

    async def verify(self, token, action=None):
        self.calls.append((token, action))
        return BotVerification(
            success=self.success, score=0.9 if self.success else 0.1, error=self.error
        )

    async def test_configuration(self):
        return self.status

    def invalidate(self) -> None:
        self.invalidations += 1


class FakeOAuthClient(OAuthClient):
    def __init__(
        self,
        refresh_token: Optional[str] = "refresh-abc",
        email: str = "council@acme.com",
        exchange_error: Optional[str] = None,
    ):
        self.refresh_token = refresh_token
        self.email = email
        self.exchange_error = exchange_error
        self.exchanges: List[Tuple[str, str, str, str]] = []

    def build_authorize_url(self, client_id, redirect_uri, state):
        return f"https://accounts.example.com/auth?client_id={client_id}&state={state}"

    async def exchange_code(self, client_id, client_secret, code, redirect_uri):
        self.exchanges.append((client_id, client_secret, code, redirect_uri))
        if self.exchange_error:
            raise OAuthError(self.exchange_error)
        return OAuthTokens(access_token="access-xyz", refresh_token=self.refresh_token)

    async def fetch_user_email(self, access_token):
        return self.email
