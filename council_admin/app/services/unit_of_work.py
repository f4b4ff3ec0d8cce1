from abc import ABC, abstractmethod

from council_admin.app.repositories.contact_repository import IContactRepository
from council_admin.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from council_admin.app.repositories.setting_repository import ISettingRepository
from council_admin.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    settings: ISettingRepository
    password_reset_tokens: IPasswordResetTokenRepository
    contacts: IContactRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
