from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from market.models.category import KindGrade


class CategoryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_kind_grade(self, kind_grade_id: int) -> KindGrade | None:
        r = await self.session.execute(
            select(KindGrade)
            .options(selectinload(KindGrade.kind), selectinload(KindGrade.grade))
            .where(KindGrade.id == kind_grade_id)
        )
        return r.scalar_one_or_none()
