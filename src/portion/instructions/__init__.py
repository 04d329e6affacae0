"""Portion - Instruction annotation scaling."""

from portion.instructions.scaler import (
    QuantityMatch,
    TextSegment,
    parse_instruction_quantities,
    parse_instruction_segments,
    scale_instruction_text,
    scale_instructions,
)

__all__ = [
    "QuantityMatch",
    "TextSegment",
    "parse_instruction_quantities",
    "parse_instruction_segments",
    "scale_instruction_text",
    "scale_instructions",
]
