"""Portion - Ingredient parsing, formatting and scaling."""

from portion.ingredients.formatting import (
    format_quantity,
    format_quantity_range,
    parse_display_quantity,
)
from portion.ingredients.parser import (
    parse_ingredient,
    parse_ingredients,
    parse_ingredients_from_markdown,
)
from portion.ingredients.scaling import (
    format_scaled_ingredient,
    scale_ingredient,
    scale_ingredients,
)

__all__ = [
    "format_quantity",
    "format_quantity_range",
    "format_scaled_ingredient",
    "parse_display_quantity",
    "parse_ingredient",
    "parse_ingredients",
    "parse_ingredients_from_markdown",
    "scale_ingredient",
    "scale_ingredients",
]
