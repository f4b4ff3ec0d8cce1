from sqlmodel.ext.asyncio.session import AsyncSession

from council_admin.app.repositories.contact_repository import IContactRepository
from council_admin.domain.entities import Contact


class ContactRepository(IContactRepository):
    """Contact repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, contact: Contact) -> Contact:
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact
