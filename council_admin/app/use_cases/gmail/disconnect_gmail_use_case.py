import logging

from council_admin.app.services.email_sender import EmailSender
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.libs.result import Result, Return
from .dtos import GMAIL_CREDENTIAL_KEYS, GMAIL_OAUTH_STATE_KEY, GmailDisconnectResponse

logger = logging.getLogger(__name__)


class DisconnectGmailUseCase:
    def __init__(self, uow: UnitOfWork, email_sender: EmailSender):
        self.uow = uow
        self.email_sender = email_sender

    async def execute(self) -> Result[GmailDisconnectResponse]:
        async with self.uow:
            removed = await self.uow.settings.delete_many(
                (*GMAIL_CREDENTIAL_KEYS, GMAIL_OAUTH_STATE_KEY)
            )
            await self.uow.commit()

        self.email_sender.invalidate()
        logger.info(f"Gmail disconnected, {removed} settings removed")

        return Return.ok(GmailDisconnectResponse(message="Gmail disconnected"))
