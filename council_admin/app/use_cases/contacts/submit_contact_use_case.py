"""
Submit Contact Use Case

Public contact form intake.
"""

import logging

from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailDeliveryError, EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.domain.entities import Contact, ContactStatus
from council_admin.libs.result import Error, Result, Return
from .dtos import SubmitContactCommand, SubmitContactResponse

logger = logging.getLogger(__name__)


class SubmitContactUseCase:
    """
    Business Rules:
    - Bot score is checked before anything is stored
    - Submissions start as NEW with the client IP and user agent recorded
    - The notification email is best effort
    """

    def __init__(self, uow: UnitOfWork, bot_verifier: BotVerifier, email_sender: EmailSender):
        self.uow = uow
        self.bot_verifier = bot_verifier
        self.email_sender = email_sender

    async def execute(
        self, command: SubmitContactCommand, ip_address: str, user_agent: str
    ) -> Result[SubmitContactResponse]:
        verification = await self.bot_verifier.verify(command.recaptcha_token, "contact")
        if not verification.success:
            logger.warning(f"Contact form bot check failed from {ip_address}: {verification.error}")
            return Return.err(
                Error(
                    "BOT_VERIFICATION_FAILED",
                    "reCAPTCHA verification failed. Please try again.",
                )
            )

        async with self.uow:
            contact = Contact(
                name=command.name,
                email=command.email,
                phone=command.phone,
                organization=command.organization,
                inquiry_type=command.inquiry_type,
                message=command.message,
                ip_address=ip_address[:64],
                user_agent=user_agent[:500],
                status=ContactStatus.NEW,
            )
            contact = await self.uow.contacts.create(contact)
            await self.uow.commit()

        try:
            await self.email_sender.send_contact_notification(contact)
        except EmailDeliveryError as e:
            logger.error(f"Contact notification for {contact.id} failed: {e}")

        return Return.ok(
            SubmitContactResponse(
                message="Your message has been sent successfully. We will get back to you soon.",
                id=str(contact.id),
            )
        )
