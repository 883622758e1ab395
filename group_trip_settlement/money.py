"""
Money Module

This module provides the money helpers shared by the balance calculator,
the settlement matcher and anything that formats currency for display.

Features:
    - Decimal-safe rounding to cents (ROUND_HALF_UP)
    - Equal split of a total across members
    - One-cent tolerance comparison for validating split totals
    - Currency formatting and parsing

Functions:
    to_decimal: Convert an int/float/str/Decimal to Decimal without float noise.
    round_money: Round an amount to 2 decimal places.
    calculate_equal_split: Divide a total evenly among members.
    amounts_match: Compare two amounts with a one-cent tolerance.
    format_currency: Format an amount with a currency symbol.
    parse_currency: Parse a currency string like "$1,234.56".
    calculate_percentage: Whole-number percentage of part over total.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from group_trip_settlement.config import get_settings


Number = Union[Decimal, int, float, str]

# Differences below one cent are treated as zero
MONEY_EPSILON = Decimal("0.01")

_CENTS = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Floats go through str() first so 0.1 becomes Decimal("0.1") rather
    than the full binary expansion.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Decimal: The converted value.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"amount must be a number, got: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"amount must be a number, got: {value!r}")

    if not result.is_finite():
        raise ValueError(f"amount must be a finite number, got: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """
    Round an amount to 2 decimal places using ROUND_HALF_UP.

    Args:
        value: Amount to round.

    Returns:
        Decimal: Amount quantized to cents.
    """
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def calculate_equal_split(total: Number, member_count: int) -> Decimal:
    """
    Calculate one member's share when a total is split evenly.

    Args:
        total: Total amount to split.
        member_count: Number of members sharing the cost.

    Returns:
        Decimal: Per-member share rounded to cents, or 0 if there are no members.
    """
    if member_count <= 0:
        return Decimal("0.00")
    return round_money(to_decimal(total) / Decimal(member_count))


def amounts_match(a: Number, b: Number) -> bool:
    """Return True if two amounts are equal to within one cent."""
    return abs(round_money(a) - round_money(b)) < MONEY_EPSILON


def format_currency(
    amount: Number,
    symbol: Optional[str] = None,
    show_cents: bool = True
) -> str:
    """
    Format a monetary amount with a currency symbol.

    Args:
        amount: The amount to format.
        symbol: Currency symbol (default: TRIP_CURRENCY_SYMBOL setting).
        show_cents: Whether to show the cents part.

    Returns:
        str: Formatted string like "$1,234.56" or "-$5.00".
    """
    if symbol is None:
        symbol = get_settings().currency_symbol

    if show_cents:
        value = round_money(amount)
    else:
        # Round once, straight to whole units
        value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.2f}" if show_cents else f"{abs(value):,.0f}"
    return f"{sign}{symbol}{digits}"


def parse_currency(text: str) -> Decimal:
    """
    Parse a currency string into a Decimal.

    Strips currency symbols, commas and whitespace, so "$1,234.56",
    "1234.56" and "₹ 50" all parse.

    Args:
        text: Currency string.

    Returns:
        Decimal: Parsed amount (not rounded).

    Raises:
        ValueError: If the string does not contain a valid number.
    """
    if not isinstance(text, str):
        raise ValueError(f"currency value must be a string, got: {text!r}")

    cleaned = re.sub(r"[^\d.\-]", "", text)
    if not cleaned or cleaned in {"-", ".", "-."}:
        raise ValueError(f"could not parse currency value: {text!r}")
    return to_decimal(cleaned)


def calculate_percentage(part: Number, total: Number) -> int:
    """Return part/total as a whole-number percentage (0 when total is 0)."""
    total_dec = to_decimal(total)
    if total_dec == 0:
        return 0
    percent = to_decimal(part) / total_dec * 100
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
