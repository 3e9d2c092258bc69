"""
Monetary Amount Helpers

Decimal parsing, rounding and display formatting for balances and transaction
amounts. NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

# Two decimal places for every stored or displayed amount
AMOUNT_PRECISION = 2

ZERO = Decimal('0.00')

# Ceiling for any balance, well inside the decimal context precision
MAX_BALANCE = Decimal('1e20')

# Optional sign, optional leading $, digits with separators
TYPED_AMOUNT = re.compile(r'([+-]?)\$?([\d.,]+)')
PLAIN_NUMBER = re.compile(r'\d+(\.\d*)?|\.\d+')


def to_amount(value: Union[Decimal, int, str]) -> Decimal:
    """
    Convert a value to a Decimal rounded to amount precision

    Args:
        value: Decimal, int or numeric string

    Returns:
        Decimal quantized to two places

    Raises:
        ValueError: If value is a float or cannot be converted
    """
    if isinstance(value, float):
        raise ValueError("Monetary amounts must not be floats")

    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal")

    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {value}")

    try:
        return value.quantize(
            Decimal('0.1') ** AMOUNT_PRECISION,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation:
        raise ValueError(f"Amount {value} is too large")


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert user-typed text to an amount, handling common formats

    Args:
        value: String representation of number, e.g. "$1,250.50"

    Returns:
        Decimal amount

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    match = TYPED_AMOUNT.fullmatch(value.strip())
    if not match:
        raise ValueError(f"Cannot convert '{value}' to Decimal")
    sign, clean_value = match.groups()

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - comma is the thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:
            clean_value = clean_value.replace(',', '.')
        else:
            clean_value = clean_value.replace(',', '')

    if not PLAIN_NUMBER.fullmatch(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    return to_amount(sign + clean_value)


def format_amount(amount: Decimal) -> str:
    """Format for display, e.g. $1,250.50"""
    return f"${to_amount(amount):,.{AMOUNT_PRECISION}f}"


def amount_to_text(amount: Decimal) -> str:
    """Plain decimal text used in the backing store, e.g. 1250.50"""
    return str(to_amount(amount))
