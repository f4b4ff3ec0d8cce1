from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional


class ISettingRepository(ABC):
    """Key/value settings repository interface - application layer"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get a single setting value"""
        pass

    @abstractmethod
    async def get_many(self, keys: Iterable[str]) -> Dict[str, str]:
        """Get the subset of keys that exist, as a dict"""
        pass

    @abstractmethod
    async def upsert(self, key: str, value: str) -> None:
        """Create or replace a setting value"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a setting if present"""
        pass

    @abstractmethod
    async def delete_many(self, keys: Iterable[str]) -> int:
        """Delete settings, returning how many rows were removed"""
        pass
