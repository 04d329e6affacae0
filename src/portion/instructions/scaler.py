"""
Portion - Instruction Scaling.

Scales {{quantity unit}} annotations embedded in instruction text.

    scale_instruction_text("Add {{100ml}} water", 4, 2)
    -> "Add 50 ml water"

    scale_instruction_text("Cook for {{20 minutes}}", 4, 2)
    -> "Cook for 20 minutes"  (time does not scale)

Annotations whose content cannot be parsed are left verbatim, braces
included.
"""

import re
from collections.abc import Collection
from dataclasses import dataclass

from portion.ingredients.formatting import format_quantity
from portion.ingredients.quantity import parse_quantity_text
from portion.ingredients.scaling import validate_servings
from portion.ingredients.vocabulary import NON_SCALING_UNITS

ANNOTATION_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
_ANNOTATION_CONTENT = re.compile(r"^([\d./\s\-]+)\s*([a-zA-Z°]+)?\s*$")


@dataclass(frozen=True)
class QuantityMatch:
    """One recognized {{...}} annotation."""

    original: str  # "{{50ml}}"
    quantity: float
    quantity_max: float | None
    unit: str  # "" when the annotation has no unit
    start_index: int
    end_index: int
    should_scale: bool


@dataclass(frozen=True)
class TextSegment:
    """Span of rendered instruction text, flagged when it holds a scaled quantity."""

    text: str
    is_scaled: bool


def should_scale_unit(unit: str, non_scaling_units: Collection[str] = NON_SCALING_UNITS) -> bool:
    """Time and temperature units keep their value; everything else scales."""
    return unit.lower().strip() not in non_scaling_units


def parse_instruction_quantities(
    text: str, non_scaling_units: Collection[str] = NON_SCALING_UNITS
) -> list[QuantityMatch]:
    """
    Find the {{...}} annotations in instruction text, left to right.

    Malformed annotations ("{{a pinch}}") are not returned.
    """
    matches = []
    for match in ANNOTATION_PATTERN.finditer(text):
        content = _ANNOTATION_CONTENT.match(match.group(1).strip())
        if not content:
            continue

        token = parse_quantity_text(content.group(1))
        if token is None:
            continue

        unit = content.group(2) or ""
        matches.append(
            QuantityMatch(
                original=match.group(0),
                quantity=token.quantity,
                quantity_max=token.quantity_max,
                unit=unit,
                start_index=match.start(),
                end_index=match.end(),
                should_scale=should_scale_unit(unit, non_scaling_units),
            )
        )

    return matches


def _format_match_quantity(quantity: float, quantity_max: float | None) -> str:
    if quantity_max is not None:
        return f"{format_quantity(quantity)}-{format_quantity(quantity_max)}"
    return format_quantity(quantity)


def render_match(match: QuantityMatch, factor: float) -> str:
    """Replacement text for one annotation at the given scale factor."""
    if match.should_scale:
        quantity = _format_match_quantity(
            match.quantity * factor,
            match.quantity_max * factor if match.quantity_max is not None else None,
        )
        return f"{quantity} {match.unit}" if match.unit else quantity

    quantity = _format_match_quantity(match.quantity, match.quantity_max)
    if not match.unit:
        return quantity
    # "180°C", but "20 minutes"
    separator = "" if match.unit.startswith("°") else " "
    return f"{quantity}{separator}{match.unit}"


def scale_instruction_text(
    instruction: str,
    original_servings: float,
    target_servings: float,
    non_scaling_units: Collection[str] = NON_SCALING_UNITS,
) -> str:
    """
    Replace every annotation in an instruction with its scaled rendering.

    Raises:
        ValueError: If either serving count is not positive
    """
    validate_servings(original_servings, target_servings)
    matches = parse_instruction_quantities(instruction, non_scaling_units)
    if not matches:
        return instruction

    factor = target_servings / original_servings
    parts = []
    last_index = 0
    for match in matches:
        parts.append(instruction[last_index:match.start_index])
        parts.append(render_match(match, factor))
        last_index = match.end_index
    parts.append(instruction[last_index:])

    return "".join(parts)


def scale_instructions(
    instructions: list[str],
    original_servings: float,
    target_servings: float,
    non_scaling_units: Collection[str] = NON_SCALING_UNITS,
) -> list[str]:
    """Scale every step of an instruction list."""
    return [
        scale_instruction_text(step, original_servings, target_servings, non_scaling_units)
        for step in instructions
    ]


def parse_instruction_segments(
    original: str,
    scaled: str,
    original_servings: float,
    target_servings: float,
    non_scaling_units: Collection[str] = NON_SCALING_UNITS,
) -> list[TextSegment]:
    """
    Split an instruction into segments for highlighting scaled quantities.

    Segment texts joined together equal scale_instruction_text(original, ...).
    When nothing was scaled, the scaled text comes back as one plain segment.
    """
    matches = parse_instruction_quantities(original, non_scaling_units)
    if not matches or original_servings == target_servings:
        return [TextSegment(text=scaled, is_scaled=False)]

    validate_servings(original_servings, target_servings)
    factor = target_servings / original_servings
    segments = []
    last_index = 0
    for match in matches:
        if match.start_index > last_index:
            segments.append(TextSegment(text=original[last_index:match.start_index], is_scaled=False))
        segments.append(TextSegment(text=render_match(match, factor), is_scaled=match.should_scale))
        last_index = match.end_index

    if last_index < len(original):
        segments.append(TextSegment(text=original[last_index:], is_scaled=False))

    return segments
