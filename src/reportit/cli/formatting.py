"""Shared output formatting for CLI commands."""

from datetime import datetime
from decimal import Decimal
from typing import Optional


def format_money(amount: Decimal, currency: str) -> str:
    return f"{amount:,.2f} {currency}"


def format_when(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.time() == datetime.min.time():
        return value.strftime("%Y-%m-%d")
    return value.strftime("%Y-%m-%d %H:%M")
