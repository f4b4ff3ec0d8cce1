import logging
from typing import Optional

from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.libs.result import Error, Result, Return
from .dtos import SendTestEmailResponse

logger = logging.getLogger(__name__)


class SendTestEmailUseCase:
    """
    Sends a fixed message through whichever Gmail credentials are active,
    so an operator can check delivery after connecting.

    Errors:
        - EMAIL_REQUIRED: No recipient given
        - EMAIL_SEND_FAILED: Delivery failed (credentials missing, token
          refresh rejected, Gmail API error)
    """

    def __init__(self, email_sender: EmailSender):
        self.email_sender = email_sender

    async def execute(self, email: Optional[str]) -> Result[SendTestEmailResponse]:
        if not email:
            return Return.err(Error("EMAIL_REQUIRED", "Email address is required"))

        try:
            await self.email_sender.send_test_email(email)
        except EmailDeliveryError as e:
            logger.error(f"Test email to {email} failed: {e}")
            return Return.err(Error("EMAIL_SEND_FAILED", f"Failed to send test email: {e}"))

        logger.info(f"Test email sent to {email}")
        return Return.ok(SendTestEmailResponse(message=f"Test email sent to {email}"))
