"""
Portion - Ingredient Scaling.

Applies a serving-count ratio to parsed ingredients and formats the result.
"""

import math

from portion.ingredients.formatting import format_quantity, format_quantity_range
from portion.models import ParsedIngredient, RecipeComponent, ScaledIngredient

COMMON_SERVING_SIZES = (2, 4, 6, 8, 10, 12)


def validate_servings(original_servings: float, target_servings: float) -> None:
    """
    Raises:
        ValueError: If either serving count is not positive
    """
    if original_servings <= 0 or target_servings <= 0:
        raise ValueError(
            f"Servings must be positive numbers (got {original_servings} -> {target_servings})"
        )


def scale_ingredient(
    ingredient: ParsedIngredient,
    original_servings: float,
    target_servings: float,
) -> ScaledIngredient:
    """
    Scale a single ingredient from original to target servings.

    Non-scalable ingredients and ingredients without a quantity keep their
    original quantity and only get a display string.
    """
    validate_servings(original_servings, target_servings)
    factor = target_servings / original_servings

    if ingredient.scalable and ingredient.quantity is not None:
        scaled_quantity = ingredient.quantity * factor
        scaled_quantity_max = (
            ingredient.quantity_max * factor if ingredient.quantity_max is not None else None
        )
    else:
        scaled_quantity = ingredient.quantity
        scaled_quantity_max = ingredient.quantity_max

    if scaled_quantity_max is not None:
        display_quantity = format_quantity_range(scaled_quantity, scaled_quantity_max)
    else:
        display_quantity = format_quantity(scaled_quantity)

    return ScaledIngredient(
        **ingredient.model_dump(include=set(ParsedIngredient.model_fields)),
        scaled_quantity=scaled_quantity,
        scaled_quantity_max=scaled_quantity_max,
        display_quantity=display_quantity,
        original_servings=original_servings,
        target_servings=target_servings,
    )


def scale_ingredients(
    ingredients: list[ParsedIngredient],
    original_servings: float,
    target_servings: float,
) -> list[ScaledIngredient]:
    """
    Scale a list of ingredients.

    Raises:
        ValueError: If either serving count is not positive
    """
    validate_servings(original_servings, target_servings)
    return [scale_ingredient(i, original_servings, target_servings) for i in ingredients]


def component_base_servings(component: RecipeComponent, recipe_servings: int) -> int:
    """Servings a component's quantities are written for.

    Borrowed components keep the serving count of the recipe they came from.
    """
    if component.reference and component.reference.source_servings:
        return component.reference.source_servings
    return recipe_servings


def format_scaled_ingredient(ingredient: ScaledIngredient) -> str:
    """
    Format a scaled ingredient as a single line.

    Examples:
        "1 1/2 cups all-purpose flour"
        "2 onion (diced)"
    """
    parts = []
    if ingredient.display_quantity:
        parts.append(ingredient.display_quantity)
    if ingredient.unit:
        parts.append(ingredient.unit)
    parts.append(ingredient.name)
    if ingredient.notes:
        parts.append(f"({ingredient.notes})")
    return " ".join(parts)


def is_scaling_practical(ingredient: ScaledIngredient, min_threshold: float = 0.1) -> bool:
    """False when scaling down produced an amount too small to measure."""
    if not ingredient.scalable or ingredient.scaled_quantity is None:
        return True
    return ingredient.scaled_quantity >= min_threshold


def suggest_serving_sizes(original_servings: int, max_suggestions: int = 5) -> list[int]:
    """Serving counts that tend to give tidy quantities: original, half, double, common sizes."""
    suggestions = {original_servings, original_servings * 2}
    if original_servings >= 2:
        suggestions.add(math.floor(original_servings / 2))
    suggestions.update(COMMON_SERVING_SIZES)
    return sorted(suggestions)[:max_suggestions]
