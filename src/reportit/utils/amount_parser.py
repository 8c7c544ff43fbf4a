"""Amount and currency-code parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from reportit.domain.errors import invalid_currency_code

CURRENCY_SYMBOLS = r"[$€£¥]"


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$1,234.56", "-123.45" and "(123.45)" (negative).

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()
    negative = cleaned.startswith("(") and cleaned.endswith(")")
    if negative:
        cleaned = cleaned[1:-1]

    cleaned = re.sub(CURRENCY_SYMBOLS, "", cleaned).replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse an amount that must not be negative.

    Raises:
        ValueError: If the string cannot be parsed or is negative
    """
    amount = parse_amount(amount_str)
    if amount < 0:
        raise ValueError(f"Amount must not be negative: '{amount_str}'")
    return amount


def parse_currency_code(code: str) -> str:
    """Normalize an ISO 4217 currency code ("usd" -> "USD").

    Raises:
        ValueError: If the code is not three letters
    """
    normalized = (code or "").strip().upper()
    if not re.fullmatch(r"[A-Z]{3}", normalized):
        raise ValueError(invalid_currency_code(code))
    return normalized
