"""Portion - Unit reconciliation and shopping list aggregation."""

from portion.shopping.aggregation import IngredientAggregator
from portion.shopping.encoder import ShoppingListEncoder
from portion.shopping.units import ConversionResult, UnitConverter

__all__ = [
    "ConversionResult",
    "IngredientAggregator",
    "ShoppingListEncoder",
    "UnitConverter",
]
