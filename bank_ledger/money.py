"""
Amount Handling Module

Parses and rounds decimal amounts and converts them to and from integer minor
units. NEVER uses float for monetary values: balances are accumulated as
integers and only turned back into Decimal for presentation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union
import re

from .errors import InvalidAmount

# Set global decimal context for financial precision
getcontext().prec = 28

DEFAULT_PRECISION = 2

AmountLike = Union[Decimal, int, str]


def quantize_amount(value: Decimal, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Round a decimal to the ledger precision

    Args:
        value: Decimal to round
        precision: Number of fractional digits

    Returns:
        Properly rounded Decimal
    """
    return value.quantize(
        Decimal('0.1') ** precision,
        rounding=ROUND_HALF_UP
    )


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        InvalidAmount: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidAmount("Amount must be a non-empty string", amount=value)

    # Remove currency symbols and whitespace; keep exponent markers
    clean_value = re.sub(r'[^\d.,\-+eE]', '', value.strip())

    # Handle comma as decimal separator (European format)
    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        # Single comma - could be decimal separator
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Likely decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Likely thousands separator
            clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise InvalidAmount(f"Cannot convert {value!r} to an amount", amount=value)


def parse_amount(value: AmountLike, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Turn a caller-supplied amount into a rounded Decimal

    Accepts Decimal, int and numeric strings. Floats are refused so binary
    rounding errors never reach a balance. The sign is not checked here.

    Raises:
        InvalidAmount: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmount("Amount must be a number, not a boolean", amount=value)

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, str):
        amount = decimal_from_string(value)
    else:
        raise InvalidAmount(
            f"Unsupported amount type {type(value).__name__}; use Decimal or str",
            amount=value,
        )

    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount}", amount=value)

    try:
        return quantize_amount(amount, precision)
    except InvalidOperation:
        raise InvalidAmount(f"Amount {amount} exceeds supported precision", amount=value)


def to_minor_units(amount: Decimal, precision: int = DEFAULT_PRECISION) -> int:
    """Convert a decimal amount to an integer count of minor units (cents)"""
    return int(quantize_amount(amount, precision).scaleb(precision))


def from_minor_units(units: int, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Convert an integer count of minor units back to a decimal amount

    Built from the digit tuple so balances wider than the decimal context
    are represented exactly.
    """
    sign = 1 if units < 0 else 0
    digits = tuple(int(digit) for digit in str(abs(units)))
    return Decimal((sign, digits, -precision))
