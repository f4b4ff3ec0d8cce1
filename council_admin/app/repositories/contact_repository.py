from abc import ABC, abstractmethod

from council_admin.domain.entities import Contact


class IContactRepository(ABC):
    """Contact repository interface - application layer"""

    @abstractmethod
    async def create(self, contact: Contact) -> Contact:
        """Store a new contact form submission"""
        pass
