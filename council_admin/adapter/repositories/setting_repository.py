from typing import Dict, Iterable, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from council_admin.app.repositories.setting_repository import ISettingRepository
from council_admin.domain.base import utcnow
from council_admin.domain.entities import Setting


class SettingRepository(ISettingRepository):
    """Settings repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Optional[str]:
        setting = await self.session.get(Setting, key)
        return setting.value if setting else None

    async def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        stmt = select(Setting).where(Setting.key.in_(list(keys)))
        result = await self.session.exec(stmt)
        return {setting.key: setting.value for setting in result.all()}

    async def upsert(self, key: str, value: str) -> None:
        setting = await self.session.get(Setting, key)
        if setting is None:
            setting = Setting(key=key, value=value)
        else:
            setting.value = value
            setting.updated_at = utcnow()
        self.session.add(setting)
        await self.session.flush()

    async def delete(self, key: str) -> None:
        setting = await self.session.get(Setting, key)
        if setting is not None:
            await self.session.delete(setting)
            await self.session.flush()

    async def delete_many(self, keys: Iterable[str]) -> int:
        stmt = select(Setting).where(Setting.key.in_(list(keys)))
        result = await self.session.exec(stmt)
        settings = result.all()
        for setting in settings:
            await self.session.delete(setting)
        await self.session.flush()
        return len(settings)
