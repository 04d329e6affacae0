"""Portion - Data models."""

from portion.models.entities import (
    SLUG_PATTERN,
    ComponentReference,
    IngredientSource,
    ParsedIngredient,
    Recipe,
    RecipeComponent,
    RecipeReference,
    ScaledIngredient,
    ShoppingItem,
    ShoppingListData,
)

__all__ = [
    "SLUG_PATTERN",
    "ComponentReference",
    "IngredientSource",
    "ParsedIngredient",
    "Recipe",
    "RecipeComponent",
    "RecipeReference",
    "ScaledIngredient",
    "ShoppingItem",
    "ShoppingListData",
]
