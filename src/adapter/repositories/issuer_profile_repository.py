"""SQLAlchemy Issuer Profile Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.issuer_profile_repository import IssuerProfileRepository
from src.domain.issuer_profile import IssuerProfile


class SqlAlchemyIssuerProfileRepository(IssuerProfileRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_owner(self, owner_id: str) -> Optional[IssuerProfile]:
        statement = select(IssuerProfile).where(IssuerProfile.owner_id == owner_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
