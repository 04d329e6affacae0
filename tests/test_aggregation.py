"""
Tests for shopping list aggregation.

Tests cover:
- Merging the same ingredient across recipes
- Per-recipe scaling
- Unit conversion and incompatible units
- Notes, ids and ordering
"""

import pytest

from factories import ingredient, recipe
from portion.models import IngredientSource
from portion.shopping.aggregation import (
    IngredientAggregator,
    collation_key,
    combine_notes,
    generate_item_id,
    normalize_name,
)
from portion.shopping.units import UnitConverter


@pytest.fixture
def aggregator() -> IngredientAggregator:
    return IngredientAggregator()


def only_item(items):
    assert len(items) == 1
    return items[0]


class TestAggregate:
    """Test merging ingredients from several recipes."""

    def test_sums_same_unit(self, aggregator):
        a = recipe("recipe-a", 4, ingredients=[ingredient("bacon", 200, "g")])
        b = recipe("recipe-b", 4, ingredients=[ingredient("bacon", 100, "g")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.name == "bacon"
        assert item.quantity == 300
        assert item.unit == "g"
        assert [s.slug for s in item.sources] == ["recipe-a", "recipe-b"]

    def test_scales_each_recipe(self, aggregator):
        a = recipe("recipe-a", 2, ingredients=[ingredient("rice", 100, "g")])
        b = recipe("recipe-b", 4, ingredients=[ingredient("rice", 200, "g")])

        item = only_item(aggregator.aggregate([a, b], [4, 2]))
        assert item.quantity == 300
        assert [s.servings for s in item.sources] == [4, 2]

    def test_non_scalable_is_not_scaled(self, aggregator):
        a = recipe("recipe-a", 2, ingredients=[ingredient("salt", 1, "pinch", scalable=False)])
        item = only_item(aggregator.aggregate([a], [6]))
        assert item.quantity == 1

    def test_groups_names_case_insensitively(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("Onion", 1)])
        b = recipe("recipe-b", ingredients=[ingredient("onion ", 2)])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.name == "onion"
        assert item.display_name == "Onion"
        assert item.quantity == 3
        assert item.unit is None

    def test_converts_to_larger_unit(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("flour", 600, "g")])
        b = recipe("recipe-b", ingredients=[ingredient("flour", 600, "g")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.quantity == pytest.approx(1.2)
        assert item.unit == "kg"

    def test_merges_compatible_units(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("milk", 500, "ml")])
        b = recipe("recipe-b", ingredients=[ingredient("milk", 1, "l")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.quantity == pytest.approx(1.5)
        assert item.unit == "L"

    def test_incompatible_units_go_to_notes(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("flour", 2, "cups")])
        b = recipe("recipe-b", ingredients=[ingredient("flour", 100, "g")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.quantity == 2
        assert item.unit == "cups"
        assert "also needed: 100g" in item.notes

    def test_sums_ranges(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("garlic", 2, "cloves", quantity_max=3)])
        b = recipe("recipe-b", ingredients=[ingredient("garlic", 2, "cloves")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.quantity == 4
        assert item.quantity_max == 5

    def test_range_maximum_follows_unit_conversion(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("potatoes", 600, "g", quantity_max=800)])
        b = recipe("recipe-b", ingredients=[ingredient("potatoes", 600, "g")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.unit == "kg"
        assert item.quantity == pytest.approx(1.2)
        assert item.quantity_max == pytest.approx(1.4)

    def test_range_maximum_survives_compatible_units(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("milk", 200, "ml", quantity_max=300)])
        b = recipe("recipe-b", ingredients=[ingredient("milk", 1, "l")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.unit == "L"
        assert item.quantity == pytest.approx(1.2)
        assert item.quantity_max == pytest.approx(1.3)

    def test_range_maximum_in_other_unit_than_minimum(self, aggregator):
        """900 ml stays in ml while the 1100 ml maximum would be litres."""
        a = recipe("recipe-a", ingredients=[ingredient("stock", 400, "ml", quantity_max=600)])
        b = recipe("recipe-b", ingredients=[ingredient("stock", 5, "dl")])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.unit == "ml"
        assert item.quantity == pytest.approx(900)
        assert item.quantity_max == pytest.approx(1100)

    def test_ranges_with_incompatible_units(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("flour", 2, "cups", quantity_max=3)])
        b = recipe("recipe-b", ingredients=[ingredient("flour", 100, "g", quantity_max=150)])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert (item.quantity, item.quantity_max, item.unit) == (2, 3, "cups")
        assert "also needed: 100-150g" in item.notes

    def test_ingredients_without_quantity(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("salt", notes="to taste", scalable=False)])
        b = recipe("recipe-b", ingredients=[ingredient("salt", notes="to taste", scalable=False)])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert item.quantity is None
        assert item.notes == "to taste"
        assert len(item.sources) == 2

    def test_quantity_wins_over_missing_quantity(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("salt", 1, "tsp")])
        b = recipe("recipe-b", ingredients=[ingredient("salt", notes="to taste", scalable=False)])

        item = only_item(aggregator.aggregate([a, b], [4, 4]))
        assert (item.quantity, item.unit) == (1, "tsp")
        assert item.notes == "to taste"

    def test_includes_component_ingredients(self, aggregator, base_recipe):
        items = {item.name: item for item in aggregator.aggregate([base_recipe], [4])}
        assert items["tomatoes"].quantity == 800
        assert items["garlic"].quantity == 4
        assert (items["flour"].quantity, items["flour"].unit) == (1, "kg")

    def test_sorted_by_display_name(self, aggregator):
        a = recipe(
            "recipe-a",
            ingredients=[
                ingredient("zucchini", 1),
                ingredient("Bananas", 2),
                ingredient("écrevisses", 3),
                ingredient("apples", 4),
            ],
        )
        names = [item.display_name for item in aggregator.aggregate([a], [4])]
        assert names == ["apples", "Bananas", "écrevisses", "zucchini"]

    def test_length_mismatch(self, aggregator, sample_recipe):
        with pytest.raises(ValueError, match="same length"):
            aggregator.aggregate([sample_recipe], [4, 2])

    def test_empty(self, aggregator):
        assert aggregator.aggregate([], []) == []

    def test_aggregation_is_associative(self, aggregator):
        """Merging in two steps gives the same total as merging at once."""
        a = recipe("recipe-a", ingredients=[ingredient("bacon", 200, "g")])
        b = recipe("recipe-b", ingredients=[ingredient("bacon", 300, "g")])
        c = recipe("recipe-c", ingredients=[ingredient("bacon", 700, "g")])
        converter = UnitConverter()

        at_once = only_item(aggregator.aggregate([a, b, c], [4, 4, 4]))
        first = only_item(aggregator.aggregate([a, b], [4, 4]))
        second = only_item(aggregator.aggregate([c], [4]))

        stepwise = converter.add_quantities(first.quantity, first.unit, second.quantity, second.unit)
        assert converter.convert(stepwise.quantity, stepwise.unit, "g") == pytest.approx(
            converter.convert(at_once.quantity, at_once.unit, "g")
        )


class TestItemIds:
    """Test deterministic shopping item ids."""

    def sources(self, *slugs):
        return [IngredientSource(slug=slug, title=slug, servings=4) for slug in slugs]

    def test_format(self):
        assert generate_item_id("bacon", self.sources("a")).startswith("item-")

    def test_independent_of_source_order(self):
        assert generate_item_id("bacon", self.sources("a", "b")) == generate_item_id("bacon", self.sources("b", "a"))

    def test_independent_of_name_casing(self):
        assert generate_item_id("Bacon", self.sources("a")) == generate_item_id("bacon", self.sources("a"))

    def test_lone_surrogate_in_name(self):
        assert generate_item_id("sug\ud800ar", self.sources("a")).startswith("item-")

    def test_differs_by_sources(self):
        assert generate_item_id("bacon", self.sources("a")) != generate_item_id("bacon", self.sources("b"))

    def test_stable_across_aggregations(self, aggregator):
        a = recipe("recipe-a", ingredients=[ingredient("bacon", 200, "g")])
        b = recipe("recipe-b", ingredients=[ingredient("bacon", 100, "g")])
        first = only_item(aggregator.aggregate([a, b], [4, 4]))
        second = only_item(aggregator.aggregate([b, a], [2, 6]))
        assert first.id == second.id


class TestHelpers:
    """Test aggregation helpers."""

    def test_normalize_name(self):
        assert normalize_name("  Red Onion ") == "red onion"

    def test_combine_notes(self):
        assert combine_notes(["diced", None, "diced", " ", "sliced"]) == "diced; sliced"
        assert combine_notes([None, ""]) is None

    def test_collation_ignores_accents_and_case(self):
        assert collation_key("Éclair")[0] == collation_key("eclair")[0]

    def test_collation_puts_lowercase_first_on_ties(self):
        assert sorted(["Apple", "apple"], key=collation_key) == ["apple", "Apple"]
