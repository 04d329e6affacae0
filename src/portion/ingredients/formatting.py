"""
Portion - Quantity Formatting.

Converts decimal quantities to cook-friendly strings and back.

    format_quantity(0.5)    -> "1/2"
    format_quantity(1.5)    -> "1 1/2"
    format_quantity(15.2)   -> "15"
    format_quantity_range(0.5, 1) -> "1/2-1"
"""

import math

from portion.ingredients.quantity import parse_quantity_text
from portion.ingredients.vocabulary import COMMON_FRACTIONS, FRACTION_TOLERANCE


def _round_half_up(value: float, digits: int) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_for_cooking(value: float) -> float:
    """Round to a precision that makes sense in a kitchen, by magnitude."""
    if value == 0:
        return 0
    if value < 1:
        return _round_half_up(value, 2)
    if value < 10:
        return _round_half_up(value, 1)
    return _round_half_up(value, 0)


def find_closest_fraction(value: float) -> str | None:
    """Closest common fraction to the fractional part of value, within tolerance."""
    fractional = value % 1
    if fractional == 0:
        return None

    closest = None
    closest_diff = math.inf
    for decimal, fraction in COMMON_FRACTIONS.items():
        diff = abs(fractional - decimal)
        if diff < closest_diff and diff < FRACTION_TOLERANCE:
            closest_diff = diff
            closest = fraction

    return closest


def _format_decimal(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


def format_quantity(value: float | None) -> str:
    """
    Format a quantity for display, preferring common fractions.

    Examples:
        format_quantity(None) -> ""
        format_quantity(0.25) -> "1/4"
        format_quantity(2.75) -> "2 3/4"
        format_quantity(0.01) -> "0.01"
        format_quantity(math.inf) -> ""
    """
    if value is None or not math.isfinite(value):
        return ""
    if value == 0:
        return "0"

    rounded = round_for_cooking(value)
    whole = math.floor(rounded)
    fraction = find_closest_fraction(rounded)

    if fraction:
        if whole == 0:
            return fraction
        return f"{whole} {fraction}"

    return _format_decimal(rounded)


def format_quantity_range(minimum: float | None, maximum: float | None) -> str:
    """
    Format a quantity range for display.

    Examples:
        format_quantity_range(2, 3) -> "2-3"
        format_quantity_range(None, 3) -> "3"
    """
    if minimum is None and maximum is None:
        return ""
    if minimum is None:
        return format_quantity(maximum)
    if maximum is None:
        return format_quantity(minimum)
    return f"{format_quantity(minimum)}-{format_quantity(maximum)}"


def parse_display_quantity(text: str | None) -> tuple[float | None, float | None]:
    """
    Parse a displayed quantity back into numbers.

    Examples:
        "1 1/2" -> (1.5, None)
        "1/2-1" -> (0.5, 1.0)
        "" -> (None, None)
    """
    if not text or not text.strip():
        return None, None

    token = parse_quantity_text(text)
    if token is None:
        return None, None
    return token.quantity, token.quantity_max
