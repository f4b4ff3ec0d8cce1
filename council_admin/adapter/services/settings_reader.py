from typing import Dict, Iterable

from sqlalchemy.orm import sessionmaker

from council_admin.adapter.repositories.setting_repository import SettingRepository


class SettingsReader:
    """
    Reads settings outside a request's unit of work.

    Used by app-scoped services (bot verifier, email sender) that live longer
    than any request session.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        async with self.session_factory() as session:
            return await SettingRepository(session).get_many(keys)
