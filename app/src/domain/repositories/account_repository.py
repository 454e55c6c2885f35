from sqlmodel.ext.asyncio.session import AsyncSession
from src.domain.models import Account
from src.domain.repositories.base_repository import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """
    Repository for reading accounts and their permissions.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Account, session)

    async def get_by_user_name(self, user_name: str) -> Account | None:
        """Get account by user name."""
        return await self.find_one_by_and_none(user_name=user_name)
