"""SQLAlchemy Monthly Template Repository Implementation"""

from typing import Optional, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.monthly_template_repository import MonthlyTemplateRepository
from src.domain.monthly_template import MonthlyTemplate


class SqlAlchemyMonthlyTemplateRepository(MonthlyTemplateRepository):
    """
    SQLAlchemy implementation of MonthlyTemplateRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, template: MonthlyTemplate) -> MonthlyTemplate:
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template

    async def get_by_id(self, template_id: int) -> Optional[MonthlyTemplate]:
        statement = select(MonthlyTemplate).where(MonthlyTemplate.id == template_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_for_month(self, owner_id: str, year: int, month: int) -> List[MonthlyTemplate]:
        statement = (
            select(MonthlyTemplate)
            .where(MonthlyTemplate.owner_id == owner_id)
            .where(MonthlyTemplate.year == year)
            .where(MonthlyTemplate.month == month)
            .order_by(MonthlyTemplate.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, template: MonthlyTemplate) -> MonthlyTemplate:
        self.session.add(template)
        await self.session.flush()
        await self.session.refresh(template)
        return template
