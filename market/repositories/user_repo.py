from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from market.models.user import User, UserRole


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        r = await self.session.execute(select(User).where(User.id == user_id))
        return r.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        r = await self.session.execute(select(User).where(User.email == email))
        return r.scalar_one_or_none()

    async def count_all_sellers(self) -> int:
        """Sellers whose account still exists plus deleted ones."""
        r = await self.session.execute(
            select(func.count(User.id)).where(User.role == UserRole.SELLER)
        )
        return r.scalar_one()
