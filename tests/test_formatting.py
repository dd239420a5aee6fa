from decimal import Decimal

from commissions.services.formatting_service import (
    format_currency,
    format_int,
    format_number,
    format_percentage,
)


def test_format_int_groups_thousands():
    assert format_int(1000) == "1,000"
    assert format_int(1234567) == "1,234,567"
    assert format_int(0) == "0"


def test_format_int_rounds_half_up():
    assert format_int(Decimal("2.5")) == "3"


def test_format_currency_two_decimals():
    assert format_currency(Decimal("1234.5")) == "1,234.50"
    assert format_currency(Decimal("195")) == "195.00"


def test_format_number_without_grouping():
    assert format_number(1234.567, decimals=1, use_grouping=False) == "1234.6"


def test_empty_and_invalid_values():
    assert format_int(None) == ""
    assert format_currency("") == ""
    assert format_number("n/d") == "n/d"


def test_format_percentage_drops_trailing_zeros():
    assert format_percentage(Decimal("10.00")) == "10%"
    assert format_percentage(Decimal("12.50")) == "12.5%"
    assert format_percentage(None) == ""
