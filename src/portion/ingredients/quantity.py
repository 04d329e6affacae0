"""
Portion - Quantity Tokenizer.

Ordered pattern matchers that recognize a quantity and return a tagged
QuantityToken. Priority order matters: range, mixed number, fraction,
decimal. The first matcher that succeeds wins.

Two grammars share these matchers:
- match_leading_quantity: quantity at the start of an ingredient line
- parse_quantity_text: the whole quantity part of a {{...}} annotation
"""

import math
import re
from dataclasses import dataclass
from enum import Enum

_NUMBER = r"\d+(?:\.\d+)?"
_NUMBER_OR_FRACTION = rf"{_NUMBER}(?:\s*/\s*\d+)?"

RANGE_PATTERN = re.compile(
    rf"^({_NUMBER_OR_FRACTION})\s*(?:[-–—]|to\b)\s*({_NUMBER_OR_FRACTION})",
    re.IGNORECASE,
)
MIXED_NUMBER_PATTERN = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)")
FRACTION_PATTERN = re.compile(r"^(\d+)\s*/\s*(\d+)")
DECIMAL_PATTERN = re.compile(rf"^({_NUMBER})")

# Annotation grammar ({{...}} content)
_ANNOTATION_RANGE = re.compile(r"^([\d./\s]+)-([\d./\s]+)$")
_ANNOTATION_MIXED = re.compile(r"^(\d+)\s+(\d+)/(\d+)$")
_ANNOTATION_FRACTION = re.compile(r"^(\d+)/(\d+)$")
_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")


class QuantityKind(str, Enum):
    """Which matcher recognized a quantity."""

    RANGE = "range"
    MIXED = "mixed"
    FRACTION = "fraction"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class QuantityToken:
    """A recognized quantity; text is the exact substring consumed."""

    kind: QuantityKind
    quantity: float
    quantity_max: float | None
    text: str


def _range_token(low: float, high: float, text: str) -> QuantityToken:
    # Bounds are stored ordered: "3-2" means the same as "2-3"
    low, high = min(low, high), max(low, high)
    return QuantityToken(QuantityKind.RANGE, low, high, text)


def _as_float(value: int | str) -> float | None:
    """float(value), or None when it does not fit in a finite float."""
    try:
        result = float(value)
    except OverflowError:
        return None
    return result if math.isfinite(result) else None


def _ratio(numerator: int, denominator: int, whole: int = 0) -> float | None:
    try:
        result = whole + numerator / denominator
    except OverflowError:
        return None
    return result if math.isfinite(result) else None


def fraction_to_decimal(text: str) -> float | None:
    """
    Convert "1 1/2", "1/2" or "2.5" to a float.

    Zero denominators degrade instead of raising: a mixed number keeps its
    whole part, a bare fraction becomes 0. Numbers too large for a float
    give None.
    """
    mixed = re.search(r"(\d+)\s+(\d+)\s*/\s*(\d+)", text)
    if mixed:
        whole, numerator, denominator = (int(g) for g in mixed.groups())
        if denominator == 0:
            return _as_float(whole)
        return _ratio(numerator, denominator, whole)

    fraction = re.search(r"(\d+)\s*/\s*(\d+)", text)
    if fraction:
        numerator, denominator = (int(g) for g in fraction.groups())
        if denominator == 0:
            return 0.0
        return _ratio(numerator, denominator)

    return leading_float(text)


def leading_float(text: str) -> float | None:
    """Parse the numeric prefix of text ("1.5 cups" -> 1.5), None if there is none."""
    match = _LEADING_FLOAT.match(text.strip())
    if not match:
        return None
    return _as_float(match.group(0))


def match_leading_quantity(text: str) -> QuantityToken | None:
    """
    Recognize a quantity at the start of text (already stripped).

    Examples:
        "2-3 cloves garlic" -> RANGE 2..3, text "2-3"
        "1 1/2 cups flour" -> MIXED 1.5
        "1/2 tsp salt" -> FRACTION 0.5
        "2.5 kg potatoes" -> DECIMAL 2.5
        "salt" -> None

    A number too large for a float is not a quantity.
    """
    match = RANGE_PATTERN.match(text)
    if match:
        low = fraction_to_decimal(match.group(1))
        high = fraction_to_decimal(match.group(2))
        if low is None or high is None:
            return None
        return _range_token(low, high, match.group(0))

    for kind, pattern in (
        (QuantityKind.MIXED, MIXED_NUMBER_PATTERN),
        (QuantityKind.FRACTION, FRACTION_PATTERN),
        (QuantityKind.DECIMAL, DECIMAL_PATTERN),
    ):
        match = pattern.match(text)
        if match:
            value = fraction_to_decimal(match.group(0))
            if value is None:
                return None
            return QuantityToken(kind, value, None, match.group(0))

    return None


def _parse_annotation_fraction(text: str) -> tuple[QuantityKind, float | None] | None:
    """Mixed number or fraction; the value is None when it overflows a float."""
    match = _ANNOTATION_MIXED.match(text)
    if match:
        whole, numerator, denominator = (int(g) for g in match.groups())
        if denominator:
            return QuantityKind.MIXED, _ratio(numerator, denominator, whole)

    match = _ANNOTATION_FRACTION.match(text)
    if match:
        numerator, denominator = (int(g) for g in match.groups())
        if denominator:
            return QuantityKind.FRACTION, _ratio(numerator, denominator)

    return None


def _parse_annotation_number(text: str) -> float | None:
    parsed = _parse_annotation_fraction(text)
    if parsed:
        return parsed[1]
    return leading_float(text)


def parse_quantity_text(text: str) -> QuantityToken | None:
    """
    Parse the quantity part of an instruction annotation.

    Examples:
        "50" -> DECIMAL 50
        "1/2" -> FRACTION 0.5
        "1 1/2" -> MIXED 1.5
        "10-15" -> RANGE 10..15
        "abc" -> None
    """
    trimmed = text.strip()

    match = _ANNOTATION_RANGE.match(trimmed)
    if match:
        low = _parse_annotation_number(match.group(1).strip())
        high = _parse_annotation_number(match.group(2).strip())
        if low is not None and high is not None:
            return _range_token(low, high, trimmed)

    parsed = _parse_annotation_fraction(trimmed)
    if parsed:
        kind, value = parsed
        if value is None:
            return None
        return QuantityToken(kind, value, None, trimmed)

    value = leading_float(trimmed)
    if value is not None:
        return QuantityToken(QuantityKind.DECIMAL, value, None, trimmed)

    return None
