"""
Portion - Ingredient Aggregation.

Merges the ingredients of several recipes, each scaled to its own
requested serving count, into one deduplicated shopping list.

Quantities are never silently dropped: when units cannot be reconciled
the extra amounts are listed in the item's notes.
"""

import logging
import math
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass

from portion.ingredients.scaling import scale_ingredient
from portion.models import IngredientSource, ParsedIngredient, Recipe, ShoppingItem
from portion.shopping.units import UnitConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourcedIngredient:
    """A (scaled) ingredient tagged with the recipe it came from."""

    ingredient: ParsedIngredient
    source: IngredientSource


def normalize_name(name: str) -> str:
    """Grouping key for ingredient names: lowercase, trimmed."""
    return name.lower().strip()


def generate_item_id(name: str, sources: list[IngredientSource]) -> str:
    """
    Deterministic id from the ingredient name and its source recipes.

    Independent of source order, so the same item keeps its id across
    page reloads (checked-off state is stored per id).
    """
    source_keys = ",".join(sorted(source.slug for source in sources))
    combined = f"{normalize_name(name)}|{source_keys}"

    # 32-bit "hash * 31 + char" over UTF-16 code units
    value = 0
    encoded = combined.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        code_unit = int.from_bytes(encoded[i:i + 2], "little")
        value = (value * 31 + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000

    return f"item-{abs(value)}"


def collation_key(text: str) -> tuple[str, str]:
    """
    Sort key that ignores case and accents.

    Ties fall back to the case-swapped text, so "apple" sorts before "Apple".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, text.swapcase()


def combine_notes(notes: list[str | None]) -> str | None:
    """Deduplicate non-empty notes (first-seen order) and join with "; "."""
    unique = []
    for note in notes:
        if note is not None and note.strip() and note not in unique:
            unique.append(note)
    return "; ".join(unique) if unique else None


def _format_amount(quantity: float) -> str:
    if math.isfinite(quantity) and quantity == int(quantity):
        return str(int(quantity))
    return repr(quantity)


def _total(items: list[SourcedIngredient]) -> float:
    return sum(item.ingredient.quantity or 0 for item in items)


def _total_max(items: list[SourcedIngredient]) -> float:
    """Sum of upper bounds; members without a range contribute their quantity."""
    return sum(
        item.ingredient.quantity_max if item.ingredient.quantity_max is not None else item.ingredient.quantity or 0
        for item in items
    )


def _has_range(items: list[SourcedIngredient]) -> bool:
    return any(item.ingredient.quantity_max is not None for item in items)


def _format_group_amount(items: list[SourcedIngredient]) -> str:
    amount = _format_amount(_total(items))
    if _has_range(items):
        amount = f"{amount}-{_format_amount(_total_max(items))}"
    return amount


class IngredientAggregator:
    """Aggregates ingredients from multiple recipes into a shopping list."""

    def __init__(self, unit_converter: UnitConverter | None = None):
        self.unit_converter = unit_converter or UnitConverter()

    def aggregate(self, recipes: list[Recipe], servings: list[int]) -> list[ShoppingItem]:
        """
        Aggregate ingredients from multiple recipes.

        Args:
            recipes: Recipes to shop for
            servings: Requested servings per recipe (same order as recipes)

        Returns:
            Shopping items sorted alphabetically by display name

        Raises:
            ValueError: If recipes and servings differ in length, or a
                serving count is not positive
        """
        if len(recipes) != len(servings):
            raise ValueError("Recipes and servings lists must have the same length")

        sourced = self.extract_all_ingredients(recipes, servings)
        groups = self.group_by_name(sourced)
        items = [self.merge_group(name, group) for name, group in groups.items()]

        logger.debug(f"Aggregated {len(sourced)} ingredients from {len(recipes)} recipes into {len(items)} items")
        return sorted(items, key=lambda item: collation_key(item.display_name))

    def extract_all_ingredients(self, recipes: list[Recipe], servings: list[int]) -> list[SourcedIngredient]:
        """Flatten and scale the ingredients of every recipe, tagging each with its source."""
        result = []
        for recipe, target_servings in zip(recipes, servings):
            source = IngredientSource(slug=recipe.slug, title=recipe.title, servings=target_servings)
            for ingredient in self.get_all_ingredients(recipe):
                if target_servings != recipe.servings:
                    scaled = scale_ingredient(ingredient, recipe.servings, target_servings)
                    ingredient = ingredient.model_copy(
                        update={
                            "quantity": scaled.scaled_quantity,
                            "quantity_max": scaled.scaled_quantity_max,
                        }
                    )
                result.append(SourcedIngredient(ingredient=ingredient, source=source))
        return result

    @staticmethod
    def get_all_ingredients(recipe: Recipe) -> list[ParsedIngredient]:
        """Top-level ingredients followed by the ingredients of every component."""
        ingredients = list(recipe.ingredients)
        for component in recipe.components or []:
            ingredients.extend(component.ingredients)
        return ingredients

    @staticmethod
    def group_by_name(items: list[SourcedIngredient]) -> dict[str, list[SourcedIngredient]]:
        groups: dict[str, list[SourcedIngredient]] = {}
        for item in items:
            groups.setdefault(normalize_name(item.ingredient.name), []).append(item)
        return groups

    def merge_group(self, name: str, group: list[SourcedIngredient]) -> ShoppingItem:
        """
        Merge all occurrences of one ingredient into a single shopping item.

        Quantities with the same unit are summed; compatible metric units are
        converted and summed; anything left over goes into the notes.
        """
        display_name = group[0].ingredient.name
        sources = [item.source for item in group]
        item_id = generate_item_id(name, sources)

        with_quantity = [item for item in group if item.ingredient.quantity is not None]
        without_quantity = [item for item in group if item.ingredient.quantity is None]

        if not with_quantity:
            return ShoppingItem(
                id=item_id,
                name=name,
                display_name=display_name,
                notes=combine_notes([item.ingredient.notes for item in group]),
                sources=sources,
            )

        unit_groups: dict[str, list[SourcedIngredient]] = {}
        for item in with_quantity:
            unit_groups.setdefault(normalize_name(item.ingredient.unit or ""), []).append(item)

        notes = [item.ingredient.notes for item in with_quantity + without_quantity]

        if len(unit_groups) == 1:
            unit, items = next(iter(unit_groups.items()))
            converted = self.unit_converter.convert_to_better_unit(_total(items), unit or None)

            quantity_max = None
            if _has_range(items):
                total_max = _total_max(items)
                # The maximum is expressed in the same unit as the headline quantity
                quantity_max = (
                    self.unit_converter.convert(total_max, unit, converted.unit) if converted.converted else total_max
                )

            return ShoppingItem(
                id=item_id,
                name=name,
                display_name=display_name,
                quantity=converted.quantity,
                quantity_max=quantity_max,
                unit=converted.unit or None,
                notes=combine_notes(notes),
                sources=sources,
            )

        merged = self.try_merge_compatible_units(unit_groups)
        if merged is not None:
            quantity_max = None
            if _has_range(with_quantity):
                merged_max = self.try_merge_compatible_units(unit_groups, total=_total_max)
                quantity_max = self.unit_converter.convert(merged_max.quantity, merged_max.unit, merged.unit)

            return ShoppingItem(
                id=item_id,
                name=name,
                display_name=display_name,
                quantity=merged.quantity,
                quantity_max=quantity_max,
                unit=merged.unit or None,
                notes=combine_notes(notes),
                sources=sources,
            )

        # Incompatible units: headline the first group, list the rest
        groups = list(unit_groups.items())
        first_items = groups[0][1]
        others = ", ".join(f"{_format_group_amount(items)}{unit}" for unit, items in groups[1:])
        logger.debug(f"Could not reconcile units for '{name}': {[unit for unit, _ in groups]}")

        return ShoppingItem(
            id=item_id,
            name=name,
            display_name=display_name,
            quantity=_total(first_items),
            quantity_max=_total_max(first_items) if _has_range(first_items) else None,
            unit=first_items[0].ingredient.unit,
            notes=combine_notes([*notes, f"also needed: {others}"]),
            sources=sources,
        )

    def try_merge_compatible_units(
        self,
        unit_groups: dict[str, list[SourcedIngredient]],
        total: Callable[[list[SourcedIngredient]], float] = _total,
    ):
        """
        Fold all unit groups into one quantity when every unit is compatible.

        total sums one unit group; pass _total_max to fold range maxima.

        Returns:
            ConversionResult with the merged total, or None if any pair of
            units cannot be reconciled
        """
        units = list(unit_groups)
        for unit1, unit2 in zip(units, units[1:]):
            if not self.unit_converter.are_units_compatible(unit1 or None, unit2 or None):
                return None

        result = None
        running, base_unit = 0.0, units[0]
        for unit, items in unit_groups.items():
            result = self.unit_converter.add_quantities(running, base_unit, total(items), unit)
            running, base_unit = result.quantity, result.unit

        return result
