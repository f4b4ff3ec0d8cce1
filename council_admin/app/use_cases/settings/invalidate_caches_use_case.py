from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.email_sender import EmailSender
from council_admin.libs.result import Result, Return
from .dtos import InvalidateCachesResponse


class InvalidateCachesUseCase:
    """Drops every cached settings-backed configuration"""

    def __init__(self, bot_verifier: BotVerifier, email_sender: EmailSender):
        self.bot_verifier = bot_verifier
        self.email_sender = email_sender

    async def execute(self) -> Result[InvalidateCachesResponse]:
        self.bot_verifier.invalidate()
        self.email_sender.invalidate()
        return Return.ok(InvalidateCachesResponse(message="Caches invalidated successfully"))
