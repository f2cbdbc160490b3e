"""Unit tests for French display formatting"""

from datetime import date, datetime
from decimal import Decimal

from src.domain.formatting import (
    format_currency,
    format_date,
    format_month_year,
    format_number,
    month_name,
)


class TestFormatCurrency:

    def test_thousands_and_decimal_comma(self):
        assert format_currency(Decimal("1234.5")) == "1 234,50 €"

    def test_millions(self):
        assert format_currency(Decimal("1234567.891")) == "1 234 567,89 €"

    def test_zero(self):
        assert format_currency(0) == "0,00 €"

    def test_half_up_rounding(self):
        assert format_currency(Decimal("2.005")) == "2,01 €"

    def test_negative(self):
        assert format_currency(Decimal("-5")) == "-5,00 €"


class TestOtherFormats:

    def test_format_number(self):
        assert format_number(Decimal("12.50")) == "12,5"
        assert format_number(Decimal("10.00")) == "10"
        assert format_number(15) == "15"

    def test_format_date(self):
        assert format_date(datetime(2025, 5, 2, 14, 30)) == "02/05/2025"
        assert format_date(date(2024, 12, 31)) == "31/12/2024"

    def test_month_names(self):
        assert month_name(date(2025, 8, 1)) == "août"
        assert format_month_year(date(2025, 5, 1)) == "mai 2025"
