"""
List Pending Users Use Case
"""

from council_admin.app.services.unit_of_work import UnitOfWork
from council_admin.libs.result import Result, Return
from .dtos import PendingUser, PendingUsersResponse


class ListPendingUsersUseCase:
    """Verified accounts that still wait for an approval decision, oldest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[PendingUsersResponse]:
        async with self.uow:
            users = await self.uow.users.list_pending_approval()
            pending = [
                PendingUser(
                    id=str(user.id),
                    name=user.name,
                    email=user.email,
                    created_at=user.created_at,
                )
                for user in users
            ]

        return Return.ok(PendingUsersResponse(users=pending, total=len(pending)))
