"""Repository for AdminUser entity."""

from sqlmodel import select

from src.portfolio_api.models import AdminUser
from src.portfolio_api.repositories.base import BaseRepository


class AdminUserRepository(BaseRepository[AdminUser]):
    """Repository for AdminUser entity."""

    model = AdminUser

    async def get_by_username(self, username: str) -> AdminUser | None:
        """Get admin by username (exact, case-sensitive match)."""
        result = await self.execute(select(AdminUser).where(AdminUser.username == username))
        return result.scalar_one_or_none()
