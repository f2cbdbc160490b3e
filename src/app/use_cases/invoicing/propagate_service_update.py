"""PropagateServiceUpdate Use Case

Pushes the label and price of a global service into the owner's drafts.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.service_repository import ServiceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.line_item import LineItem
from .common import not_found_error, unauthenticated_error
from .dtos import ServicePropagationResultDTO

logger = logging.getLogger(__name__)


class PropagateServiceUpdate:
    """
    Use Case: Apply a changed global service to unsent invoices

    Business Rules:
    1. Service must exist and belong to the caller
    2. Only global services propagate
    3. Only draft invoices change; sent and paid invoices are untouched
    4. Matching lines take the service label and default price, keep their
       quantity and discount, and the invoice total is re-derived
    """

    def __init__(
        self,
        uow: UnitOfWork,
        service_repo: ServiceRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.service_repo = service_repo
        self.invoice_repo = invoice_repo

    async def execute(self, service_id: int, owner_id: str) -> Result[ServicePropagationResultDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        try:
            service = await self.service_repo.get_by_id(service_id)
            if service is None or service.owner_id != owner_id:
                return Return.err(not_found_error("Service", service_id))

            if not service.is_global:
                return Return.ok(ServicePropagationResultDTO(service_id=service_id))

            drafts = await self.invoice_repo.list_by_owner(owner_id, status=InvoiceStatus.DRAFT)

            updated_ids = []
            for invoice in drafts:
                items = invoice.line_items
                if not any(item.service_id == service_id for item in items):
                    continue

                invoice.replace_items(
                    [
                        LineItem(
                            **{
                                **item.model_dump(exclude={"total"}),
                                "label": service.label,
                                "unit_price": service.default_price,
                            }
                        )
                        if item.service_id == service_id
                        else item
                        for item in items
                    ]
                )
                await self.invoice_repo.update(invoice)
                updated_ids.append(invoice.id)

            await self.uow.commit()
            logger.info(f"Service {service_id} propagated to {len(updated_ids)} draft invoices")

            return Return.ok(
                ServicePropagationResultDTO(service_id=service_id, updated_invoice_ids=updated_ids)
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PROPAGATE_SERVICE_FAILED",
                    message="Failed to update draft invoices",
                    reason=str(e),
                )
            )
