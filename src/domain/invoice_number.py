"""Invoice numbering rules

Invoice numbers have the form YYYYMM## where ## is a per-owner, per-month
sequence starting at 01.
"""

from datetime import date, datetime
from typing import Iterable, Union

from src.domain.errors import InvoiceNumberExhaustedError

SEQUENCE_DIGITS = 2
MAX_SEQUENCE = 10 ** SEQUENCE_DIGITS - 1


def number_prefix(reference_date: Union[date, datetime]) -> str:
    return f"{reference_date.year:04d}{reference_date.month:02d}"


def parse_sequence(invoice_number: str, prefix: str) -> int:
    """Sequence encoded in the trailing digits, 0 when the number is not part of the month"""
    if not invoice_number.startswith(prefix):
        return 0
    tail = invoice_number[-SEQUENCE_DIGITS:]
    if len(invoice_number) <= len(prefix) or not tail.isdigit():
        return 0
    return int(tail)


def next_invoice_number(
    existing_numbers: Iterable[str], reference_date: Union[date, datetime]
) -> str:
    """
    Compute the next free number of the month

    Args:
        existing_numbers: Invoice numbers already used by the owner
        reference_date: Date whose year and month select the sequence

    Returns:
        prefix + max(sequence) + 1, zero padded to two digits

    Raises:
        InvoiceNumberExhaustedError: If the month already reached sequence 99
    """
    prefix = number_prefix(reference_date)
    highest = max((parse_sequence(n, prefix) for n in existing_numbers), default=0)
    sequence = highest + 1
    if sequence > MAX_SEQUENCE:
        raise InvoiceNumberExhaustedError(
            f"No invoice number left for {prefix}: the monthly sequence is limited to {MAX_SEQUENCE}"
        )
    return f"{prefix}{sequence:0{SEQUENCE_DIGITS}d}"
