"""
Account email delivery through the Gmail API.

Credentials come from the settings table (written by the OAuth connect
flow, secrets encrypted) and fall back to GMAIL_* configuration. An access
token is minted from the refresh token for every send.
"""

import base64
import logging
import os
import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Awaitable, Callable, Dict, Iterable, Optional

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from council_admin.adapter.integrations.google_oauth import GoogleOAuthClient
from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.encryption import Encryptor
from council_admin.app.services.oauth_client import OAuthError
from council_admin.app.services.settings_cache import SettingsCache
from council_admin.domain.base import utcnow
from council_admin.domain.entities import Contact, InquiryType

logger = logging.getLogger(__name__)

GMAIL_SEND_URL = "https://gmail.googleapis.com/gmail/v1/users/me/messages/send"
SENDER_NAME = "Western Nebraska Sports Council"
TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

GMAIL_SETTING_KEYS = (
    "gmail_client_id",
    "gmail_client_secret",
    "gmail_refresh_token",
    "gmail_connected_email",
)

SettingsLoader = Callable[[Iterable[str]], Awaitable[Dict[str, str]]]


class GmailCredentials(BaseModel):
    client_id: str
    client_secret: str
    refresh_token: str
    sender_email: str


def build_mime_message(sender: str, to: str, subject: str, html: str) -> str:
    """multipart/alternative message, base64url encoded without padding"""
    message = MIMEMultipart("alternative")
    message["From"] = formataddr((SENDER_NAME, sender))
    message["To"] = to
    message["Subject"] = subject
    message.attach(MIMEText(re.sub(r"<[^>]*>", "", html), "plain", "utf-8"))
    message.attach(MIMEText(html, "html", "utf-8"))
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")


class GmailEmailSender(EmailSender):
    def __init__(
        self,
        config,
        http_client: httpx.AsyncClient,
        oauth_client: GoogleOAuthClient,
        load_settings: SettingsLoader,
        encryptor: Encryptor,
        cache: SettingsCache[GmailCredentials],
        template_dir: str = TEMPLATE_DIR,
    ):
        self.config = config
        self.http_client = http_client
        self.oauth_client = oauth_client
        self.load_settings = load_settings
        self.encryptor = encryptor
        self.cache = cache
        self._jinja = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def invalidate(self) -> None:
        self.cache.invalidate()

    async def get_credentials(self) -> GmailCredentials:
        cached = self.cache.get()
        if cached is not None:
            return cached

        try:
            values = await self.load_settings(GMAIL_SETTING_KEYS)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load Gmail settings: {e}")
            values = {}

        if (
            values.get("gmail_client_id")
            and values.get("gmail_client_secret")
            and values.get("gmail_refresh_token")
        ):
            try:
                credentials = GmailCredentials(
                    client_id=values["gmail_client_id"],
                    client_secret=self.encryptor.decrypt(values["gmail_client_secret"]),
                    refresh_token=self.encryptor.decrypt(values["gmail_refresh_token"]),
                    sender_email=values.get("gmail_connected_email")
                    or self.config.ADMIN_EMAIL
                    or "",
                )
            except ValueError as e:
                raise EmailDeliveryError(f"Stored Gmail credentials are unreadable: {e}") from e
        elif (
            self.config.GMAIL_CLIENT_ID
            and self.config.GMAIL_CLIENT_SECRET
            and self.config.GMAIL_REFRESH_TOKEN
        ):
            credentials = GmailCredentials(
                client_id=self.config.GMAIL_CLIENT_ID,
                client_secret=self.config.GMAIL_CLIENT_SECRET,
                refresh_token=self.config.GMAIL_REFRESH_TOKEN,
                sender_email=self.config.ADMIN_EMAIL or "",
            )
        else:
            raise EmailDeliveryError("Gmail credentials not configured")

        self.cache.set(credentials)
        return credentials

    async def send(self, to: str, subject: str, html: str) -> None:
        if not to:
            raise EmailDeliveryError("No recipient address")

        credentials = await self.get_credentials()

        try:
            access_token = await self.oauth_client.refresh_access_token(
                credentials.client_id, credentials.client_secret, credentials.refresh_token
            )
        except OAuthError as e:
            raise EmailDeliveryError(f"Gmail authorization failed: {e}") from e

        raw = build_mime_message(credentials.sender_email, to, subject, html)

        try:
            response = await self.http_client.post(
                GMAIL_SEND_URL,
                json={"raw": raw},
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Gmail request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Gmail send to {to} failed ({response.status_code}): {response.text[:200]}")
            raise EmailDeliveryError(f"Gmail API returned {response.status_code}")

        logger.info(
            f"Email sent to {to} from {credentials.sender_email}, "
            f"messageId: {response.json().get('id')}"
        )

    def _render(self, template_name: str, **context) -> str:
        return self._jinja.get_template(template_name).render(**context)

    def _site_url(self) -> str:
        if not self.config.SITE_URL:
            raise EmailDeliveryError("Site URL not configured")
        return self.config.SITE_URL.rstrip("/")

    def _notification_recipient(self) -> Optional[str]:
        return self.config.NOTIFICATION_EMAIL or self.config.ADMIN_EMAIL

    async def send_verification_email(self, email: str, name: str, token: str) -> None:
        verify_url = f"{self._site_url()}/verify-email?token={token}"
        html = self._render("verification.html", name=name, verify_url=verify_url)
        await self.send(email, "Verify Your Email - WNSC", html)

    async def send_account_approved_email(self, email: str, name: str) -> None:
        html = self._render(
            "account_approved.html", name=name, login_url=f"{self._site_url()}/login"
        )
        await self.send(email, "Account Approved - WNSC", html)

    async def send_account_rejected_email(
        self, email: str, name: str, reason: Optional[str] = None
    ) -> None:
        html = self._render("account_rejected.html", name=name, reason=reason)
        await self.send(email, "Account Registration Update - WNSC", html)

    async def send_new_registration_notification(self, name: str, email: str) -> None:
        html = self._render(
            "new_registration.html",
            name=name,
            email=email,
            admin_url=f"{self._site_url()}/admin/users",
        )
        await self.send(
            self._notification_recipient(),
            "New User Registration Pending Approval - WNSC",
            html,
        )

    async def send_password_reset_email(self, email: str, name: str, token: str) -> None:
        reset_url = f"{self._site_url()}/reset-password?token={token}"
        html = self._render("password_reset.html", name=name, reset_url=reset_url)
        await self.send(email, "Password Reset Request", html)

    async def send_contact_notification(self, contact: Contact) -> None:
        html = self._render(
            "contact_notification.html",
            contact=contact,
            inquiry_type=InquiryType(contact.inquiry_type).value.replace("_", " "),
        )
        await self.send(self._notification_recipient(), "New Contact Form Submission", html)

    async def send_test_email(self, email: str) -> None:
        html = self._render("test_email.html", sent_at=utcnow().isoformat())
        await self.send(email, "WNSC Test Email", html)
