"""Utility functions for supportbank."""

from supportbank.utils.date_parser import parse_date, parse_serial_date
from supportbank.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_serial_date", "parse_amount"]
