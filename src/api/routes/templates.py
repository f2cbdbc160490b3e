"""Monthly Template API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.routes.invoices import build_create_invoice, unwrap
from src.app.use_cases.invoicing.dtos import (
    CreateMonthlyTemplatesResultDTO,
    InvoiceResponseDTO,
    MonthlyTemplateListResponseDTO,
)
from src.app.use_cases.invoicing.monthly_templates import (
    CreateInvoiceFromTemplate,
    CreateMonthlyTemplates,
    ListMonthlyTemplates,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.monthly_template_repository import SqlAlchemyMonthlyTemplateRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_owner_id, get_session

router = APIRouter(prefix="/invoices/templates", tags=["Monthly templates"])


@router.get("", response_model=MonthlyTemplateListResponseDTO)
async def list_monthly_templates(
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """List this month's templates with their client names."""
    use_case = ListMonthlyTemplates(
        SqlAlchemyMonthlyTemplateRepository(session),
        SqlAlchemyClientRepository(session),
    )
    return unwrap(await use_case.execute(owner_id))


@router.post(
    "",
    response_model=CreateMonthlyTemplatesResultDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_monthly_templates(
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Build this month's templates from the invoices sent last month.

    Clients that already have a template for the month are skipped.
    """
    use_case = CreateMonthlyTemplates(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyMonthlyTemplateRepository(session),
    )
    return unwrap(await use_case.execute(owner_id))


@router.post(
    "/{template_id}/invoices",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_invoice_from_template(
    template_id: int,
    owner_id: str = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
):
    """Create a draft invoice from a monthly template."""
    use_case = CreateInvoiceFromTemplate(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyMonthlyTemplateRepository(session),
        build_create_invoice(session),
    )
    return unwrap(await use_case.execute(template_id, owner_id))
