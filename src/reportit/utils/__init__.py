"""Utility functions for reportit."""

from reportit.utils.date_parser import parse_date, parse_datetime
from reportit.utils.amount_parser import parse_amount, parse_currency_code

__all__ = ["parse_date", "parse_datetime", "parse_amount", "parse_currency_code"]
