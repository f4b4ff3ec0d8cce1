from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.libs.result import Result, Return
from .dtos import GMAIL_CREDENTIAL_KEYS, GmailStatusResponse


class GmailStatusUseCase:
    """Connected only when the full stored credential set is present"""

    def __init__(self, uow: UnitOfWork, has_env_config: bool):
        self.uow = uow
        self.has_env_config = has_env_config

    async def execute(self) -> Result[GmailStatusResponse]:
        async with self.uow:
            values = await self.uow.settings.get_many(GMAIL_CREDENTIAL_KEYS)

        is_connected = all(
            values.get(key)
            for key in (
                "gmail_client_id",
                "gmail_client_secret",
                "gmail_refresh_token",
                "gmail_connected_email",
            )
        )

        return Return.ok(
            GmailStatusResponse(
                is_connected=is_connected,
                connected_email=values.get("gmail_connected_email"),
                connected_at=values.get("gmail_connected_at"),
                has_env_config=self.has_env_config,
                using_env_config=not is_connected and self.has_env_config,
            )
        )
