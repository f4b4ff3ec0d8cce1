"""
Update reCAPTCHA Settings Use Case
"""

import logging

from council_admin.app.services.bot_verifier import BotVerifier
from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.libs.result import Result, Return
from .dtos import RecaptchaSettingsResponse, UpdateRecaptchaSettingsCommand

logger = logging.getLogger(__name__)


class UpdateRecaptchaSettingsUseCase:
    """
    Business Rules:
    - Values are stored as strings in the settings table
    - Empty site or secret key removes the stored key; an omitted secret is kept
    - The verifier's cached configuration is dropped after the change
    """

    def __init__(self, uow: UnitOfWork, bot_verifier: BotVerifier):
        self.uow = uow
        self.bot_verifier = bot_verifier

    async def execute(
        self, command: UpdateRecaptchaSettingsCommand
    ) -> Result[RecaptchaSettingsResponse]:
        async with self.uow:
            await self.uow.settings.upsert(
                "recaptcha_enabled", "true" if command.enabled else "false"
            )
            await self.uow.settings.upsert("recaptcha_threshold", str(command.threshold))

            if command.site_key is not None:
                if command.site_key.strip():
                    await self.uow.settings.upsert("recaptcha_site_key", command.site_key.strip())
                else:
                    await self.uow.settings.delete("recaptcha_site_key")

            if command.secret_key is not None:
                if command.secret_key.strip():
                    await self.uow.settings.upsert(
                        "recaptcha_secret_key", command.secret_key.strip()
                    )
                else:
                    await self.uow.settings.delete("recaptcha_secret_key")

            site_key = await self.uow.settings.get("recaptcha_site_key")
            secret_key = await self.uow.settings.get("recaptcha_secret_key")

            await self.uow.commit()

        self.bot_verifier.invalidate()
        logger.info(f"reCAPTCHA settings updated (enabled={command.enabled})")

        return Return.ok(
            RecaptchaSettingsResponse(
                enabled=command.enabled,
                site_key=site_key,
                secret_key_configured=bool(secret_key),
                threshold=command.threshold,
            )
        )
