from council_admin.app.services.bot_verifier import BotConfigurationStatus, BotVerifier
from council_admin.libs.result import Error, Result, Return


class CheckRecaptchaUseCase:
    """Checks the configured keys against Google without a real user token"""

    def __init__(self, bot_verifier: BotVerifier):
        self.bot_verifier = bot_verifier

    async def execute(self) -> Result[BotConfigurationStatus]:
        """
        Errors:
            - NOT_CONFIGURED
            - INVALID_SECRET
            - REQUEST_FAILED
        """
        outcome = await self.bot_verifier.test_configuration()
        if not outcome.success:
            return Return.err(Error(outcome.status.upper(), outcome.message))
        return Return.ok(outcome)
