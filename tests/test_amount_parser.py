"""Tests for amount and currency-code parsing."""

from decimal import Decimal

import pytest

from reportit.utils.amount_parser import parse_amount, parse_currency_code, parse_positive_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("-12", Decimal("-12")),
        ("(99.10)", Decimal("-99.10")),
        (" €5 ", Decimal("5")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_positive_amount():
    assert parse_positive_amount("0") == Decimal("0")
    with pytest.raises(ValueError, match="negative"):
        parse_positive_amount("-1")


def test_parse_currency_code():
    assert parse_currency_code(" eur ") == "EUR"
    with pytest.raises(ValueError):
        parse_currency_code("EURO")
    with pytest.raises(ValueError):
        parse_currency_code("E1R")
