from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class BotVerification(BaseModel):
    """Outcome of a bot-score check"""

    success: bool
    score: float
    error: Optional[str] = None


class BotConfigurationStatus(BaseModel):
    """Outcome of probing the configured verification keys"""

    success: bool
    status: str
    message: str


class BotVerifier(ABC):
    """Bot-score verification interface - application layer"""

    @abstractmethod
    async def verify(self, token: Optional[str], action: Optional[str] = None) -> BotVerification:
        pass

    @abstractmethod
    async def test_configuration(self) -> BotConfigurationStatus:
        pass

    @abstractmethod
    def invalidate(self) -> None:
        """Drop cached configuration so the next check rereads it"""
        pass
