"""Monthly template use cases

Recurring clients are re-billed from the invoices sent to them the month
before.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from dateutil.relativedelta import relativedelta
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.monthly_template_repository import MonthlyTemplateRepository
from src.domain.invoice import InvoiceStatus
from src.domain.monthly_template import MonthlyTemplate
from .common import load_owned_client, not_found_error, unauthenticated_error
from .create_invoice import CreateInvoice
from .dtos import (
    CreateInvoiceCommandDTO,
    CreateMonthlyTemplatesResultDTO,
    InvoiceResponseDTO,
    MonthlyTemplateListResponseDTO,
    MonthlyTemplateResponseDTO,
)

logger = logging.getLogger(__name__)


def previous_month_bounds(reference: datetime):
    """First and last instant of the calendar month before reference"""
    month_start = reference.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    previous_start = month_start - relativedelta(months=1)
    return previous_start, month_start - timedelta(microseconds=1)


def to_template_dto(template: MonthlyTemplate, client_name: Optional[str] = None) -> MonthlyTemplateResponseDTO:
    return MonthlyTemplateResponseDTO(
        template_id=template.id,
        client_id=template.client_id,
        client_name=client_name,
        year=template.year,
        month=template.month,
        items=template.items,
        last_invoice_id=template.last_invoice_id,
    )


class CreateMonthlyTemplates:
    """
    Use Case: Build this month's templates from last month's sent invoices

    Business Rules:
    1. Only invoices with status sent are used
    2. One template per client and month; clients that already have one
       are skipped
    3. Template items keep service, label, quantity and unit price only
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        template_repo: MonthlyTemplateRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.template_repo = template_repo

    async def execute(
        self, owner_id: str, reference_date: Optional[datetime] = None
    ) -> Result[CreateMonthlyTemplatesResultDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        reference_date = reference_date or datetime.utcnow()
        year, month = reference_date.year, reference_date.month

        try:
            start, end = previous_month_bounds(reference_date)
            invoices = await self.invoice_repo.list_in_period(
                owner_id, start, end, status=InvoiceStatus.SENT
            )
            existing = await self.template_repo.list_for_month(owner_id, year, month)
            templated_clients = {template.client_id for template in existing}

            created = []
            skipped = []
            for invoice in invoices:
                if invoice.client_id in templated_clients:
                    if invoice.client_id not in skipped:
                        skipped.append(invoice.client_id)
                    continue

                template = await self.template_repo.create(
                    MonthlyTemplate(
                        owner_id=owner_id,
                        client_id=invoice.client_id,
                        year=year,
                        month=month,
                        items=MonthlyTemplate.items_from(invoice.line_items),
                    )
                )
                templated_clients.add(invoice.client_id)
                created.append(to_template_dto(template))

            await self.uow.commit()
            logger.info(
                f"{len(created)} monthly templates created for owner {owner_id} ({year}-{month:02d})"
            )

            return Return.ok(
                CreateMonthlyTemplatesResultDTO(
                    year=year, month=month, created=created, skipped_clients=skipped
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_TEMPLATES_FAILED",
                    message="Failed to create monthly templates",
                    reason=str(e),
                )
            )


class ListMonthlyTemplates:
    """
    Use Case: List the caller's templates for a month

    Defaults to the current month. Each template carries its client's
    name, or None when the client no longer exists.
    """

    def __init__(
        self,
        template_repo: MonthlyTemplateRepository,
        client_repo: ClientRepository,
    ):
        self.template_repo = template_repo
        self.client_repo = client_repo

    async def execute(
        self, owner_id: str, reference_date: Optional[datetime] = None
    ) -> Result[MonthlyTemplateListResponseDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        reference_date = reference_date or datetime.utcnow()
        year, month = reference_date.year, reference_date.month

        try:
            templates = await self.template_repo.list_for_month(owner_id, year, month)

            client_names = {}
            for template in templates:
                if template.client_id not in client_names:
                    client = await load_owned_client(self.client_repo, template.client_id, owner_id)
                    client_names[template.client_id] = client.name if client else None

            return Return.ok(
                MonthlyTemplateListResponseDTO(
                    year=year,
                    month=month,
                    templates=[
                        to_template_dto(template, client_names[template.client_id])
                        for template in templates
                    ],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_TEMPLATES_FAILED",
                    message="Failed to list monthly templates",
                    reason=str(e),
                )
            )


class CreateInvoiceFromTemplate:
    """
    Use Case: Create a draft invoice from a monthly template

    The template remembers the last invoice created from it.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        template_repo: MonthlyTemplateRepository,
        create_invoice: CreateInvoice,
    ):
        self.uow = uow
        self.template_repo = template_repo
        self.create_invoice = create_invoice

    async def execute(self, template_id: int, owner_id: str) -> Result[InvoiceResponseDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        template = await self.template_repo.get_by_id(template_id)
        if template is None or template.owner_id != owner_id:
            return Return.err(not_found_error("MonthlyTemplate", template_id))

        result = await self.create_invoice.execute(
            CreateInvoiceCommandDTO(
                owner_id=owner_id,
                client_id=template.client_id,
                items=template.to_line_items(),
            )
        )
        if result.is_err():
            return result

        try:
            template.last_invoice_id = result.value.invoice_id
            await self.template_repo.update(template)
            await self.uow.commit()
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_TEMPLATE_FAILED",
                    message="Invoice created but the template could not be updated",
                    reason=str(e),
                )
            )

        return result
