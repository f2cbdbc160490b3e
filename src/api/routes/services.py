"""Service catalog API Routes"""

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.routes.invoices import unwrap
from src.app.use_cases.invoicing.dtos import ServicePropagationResultDTO
from src.app.use_cases.invoicing.propagate_service_update import PropagateServiceUpdate
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.service_repository import SqlAlchemyServiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_owner_id, get_session

router = APIRouter(prefix="/services", tags=["Services"])


@router.post("/{service_id}/propagate", response_model=ServicePropagationResultDTO)
async def propagate_service_update(
    service_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Apply the current label and price of a global service to every draft
    invoice that uses it. Sent and paid invoices are not modified.
    """
    use_case = PropagateServiceUpdate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyServiceRepository(session),
        SqlAlchemyInvoiceRepository(session),
    )
    return unwrap(await use_case.execute(service_id, owner_id))
