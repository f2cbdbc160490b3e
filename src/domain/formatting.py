"""French display formatting for amounts and dates"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from src.domain.pricing import to_decimal

CENT = Decimal("0.01")
MONTH_NAMES_FR = (
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
)


def _group_thousands(digits: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return " ".join(groups)


def format_currency(amount) -> str:
    """1234.5 -> '1 234,50 €'"""
    value = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):.2f}".partition(".")
    return f"{sign}{_group_thousands(integer_part)},{fraction} €"


def format_number(value) -> str:
    """Shortest French decimal representation: 12.50 -> '12,5', 10.00 -> '10'"""
    number = to_decimal(value)
    if number == number.to_integral_value():
        return str(number.quantize(Decimal("1")))
    return format(number.normalize(), "f").replace(".", ",")


def format_date(value: Union[date, datetime]) -> str:
    return value.strftime("%d/%m/%Y")


def month_name(value: Union[date, datetime]) -> str:
    return MONTH_NAMES_FR[value.month - 1]


def format_month_year(value: Union[date, datetime]) -> str:
    return f"{month_name(value)} {value.year}"
