"""GetRevenueStatistics Use Case"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.formatting import format_month_year
from .common import unauthenticated_error
from .dtos import MonthlyRevenueDTO, RevenueStatisticsDTO


def previous_quarter(today: date) -> Tuple[int, int]:
    """(year, quarter) of the last full calendar quarter before today"""
    quarter = (today.month - 1) // 3 + 1
    if quarter == 1:
        return today.year - 1, 4
    return today.year, quarter - 1


def quarter_month_keys(year: int, quarter: int) -> List[str]:
    first_month = (quarter - 1) * 3 + 1
    return [f"{year}-{month:02d}" for month in range(first_month, first_month + 3)]


class GetRevenueStatistics:
    """
    Use Case: Monthly revenue and last full quarter total

    Every invoice of the owner counts, grouped by the month of its invoice
    date. Months without invoices are omitted.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, owner_id: str, today: Optional[date] = None) -> Result[RevenueStatisticsDTO]:
        if not owner_id:
            return Return.err(unauthenticated_error())

        try:
            invoices = await self.invoice_repo.list_by_owner(owner_id)
        except Exception as e:
            return Return.err(
                Error(code="STATISTICS_FAILED", message="Failed to load invoices", reason=str(e))
            )

        totals = {}
        for invoice in invoices:
            key = invoice.invoice_date.strftime("%Y-%m")
            totals[key] = totals.get(key, Decimal("0")) + Decimal(invoice.total_amount)

        monthly = [
            MonthlyRevenueDTO(
                month_key=key,
                label=format_month_year(datetime.strptime(key, "%Y-%m")),
                total=total,
            )
            for key, total in sorted(totals.items())
        ]

        year, quarter = previous_quarter(today or datetime.utcnow().date())
        quarter_keys = quarter_month_keys(year, quarter)
        quarter_total = sum(
            (entry.total for entry in monthly if entry.month_key in quarter_keys), Decimal("0")
        )

        return Return.ok(
            RevenueStatisticsDTO(
                monthly=monthly,
                last_quarter_label=f"T{quarter} {year}",
                last_quarter_total=quarter_total,
            )
        )
