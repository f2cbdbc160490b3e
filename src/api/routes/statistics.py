"""Revenue Statistics API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.routes.invoices import unwrap
from src.app.use_cases.invoicing.dtos import RevenueStatisticsDTO
from src.app.use_cases.invoicing.revenue_statistics import GetRevenueStatistics
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.depends import get_owner_id, get_session

router = APIRouter(prefix="/invoices/statistics", tags=["Statistics"])


@router.get("", response_model=RevenueStatisticsDTO)
async def get_revenue_statistics(
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Monthly revenue in chronological order and the total of the last full
    calendar quarter.
    """
    use_case = GetRevenueStatistics(SqlAlchemyInvoiceRepository(session))
    return unwrap(await use_case.execute(owner_id))
