"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Union


def parse_amount(amount: Union[str, int, float, Decimal, None]) -> Decimal:
    """Parse an amount into a finite Decimal.

    Handles various formats:
    - "123.45"
    - "£123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - 123.45 (numbers from structured sources)

    Args:
        amount: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed or is not finite
    """
    if amount is None:
        raise ValueError("Missing amount")

    # bool is an int subclass but never a meaningful amount
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount '{amount}'")

    amount_str = str(amount)
    if not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    amount_str = amount_str.strip()

    try:
        value = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not value.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")

    return -value if is_negative else value
