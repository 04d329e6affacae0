"""
Tests for unit conversion.

Tests cover:
- Compatibility of units within a family
- Conversion to a more readable unit
- Adding quantities across compatible units
"""

import pytest

from portion.shopping.units import VOLUME_TO_ML, UnitConverter


@pytest.fixture
def converter() -> UnitConverter:
    return UnitConverter()


class TestCompatibility:
    """Test unit family checks."""

    def test_same_unit(self, converter):
        assert converter.are_units_compatible("cup", "cup") is True

    def test_same_family(self, converter):
        assert converter.are_units_compatible("ml", "l") is True
        assert converter.are_units_compatible("ML", "l") is True
        assert converter.are_units_compatible("g", "kg") is True

    def test_different_families(self, converter):
        assert converter.are_units_compatible("g", "ml") is False
        assert converter.are_units_compatible("cup", "ml") is False

    def test_missing_unit(self, converter):
        assert converter.are_units_compatible(None, "g") is False
        assert converter.are_units_compatible("g", "") is False

    def test_extended_table(self):
        converter = UnitConverter(volume_units={**VOLUME_TO_ML, "tsp": 5})
        assert converter.are_units_compatible("tsp", "ml") is True
        assert converter.convert(2, "tsp", "ml") == 10


class TestConvertToBetterUnit:
    """Test promotion to larger units."""

    def test_ml_to_litres(self, converter):
        result = converter.convert_to_better_unit(1500, "ml")
        assert result.quantity == 1.5
        assert result.unit == "L"
        assert result.converted is True

    def test_grams_to_kilograms(self, converter):
        result = converter.convert_to_better_unit(2000, "g")
        assert result.quantity == 2
        assert result.unit == "kg"

    def test_small_amounts_stay(self, converter):
        result = converter.convert_to_better_unit(500, "ml")
        assert (result.quantity, result.unit, result.converted) == (500, "ml", False)

    def test_already_largest_unit(self, converter):
        result = converter.convert_to_better_unit(2, "kg")
        assert (result.quantity, result.unit, result.converted) == (2, "kg", False)

    def test_unknown_unit(self, converter):
        result = converter.convert_to_better_unit(3, "cups")
        assert (result.quantity, result.unit, result.converted) == (3, "cups", False)

    def test_no_unit(self, converter):
        result = converter.convert_to_better_unit(3, None)
        assert result.unit == ""
        assert result.converted is False


class TestConvert:
    """Test direct conversion between units."""

    def test_within_family(self, converter):
        assert converter.convert(1.5, "kg", "g") == 1500
        assert converter.convert(250, "ml", "l") == 0.25

    def test_same_unit(self, converter):
        assert converter.convert(3, "cup", "cup") == 3

    def test_incompatible(self, converter):
        with pytest.raises(ValueError, match="incompatible"):
            converter.convert(1, "cup", "ml")


class TestAddQuantities:
    """Test adding quantities."""

    def test_millilitres_and_litre(self, converter):
        result = converter.add_quantities(500, "ml", 1, "L")
        assert result.quantity == 1.5
        assert result.unit == "L"
        assert result.converted is True

    def test_same_unit(self, converter):
        result = converter.add_quantities(200, "g", 300, "g")
        assert (result.quantity, result.unit) == (500, "g")

    def test_same_unit_promoted(self, converter):
        result = converter.add_quantities(600, "g", 600, "g")
        assert result.quantity == pytest.approx(1.2)
        assert result.unit == "kg"

    def test_non_metric_same_unit(self, converter):
        result = converter.add_quantities(1, "cup", 2, "cup")
        assert (result.quantity, result.unit) == (3, "cup")

    def test_unitless(self, converter):
        result = converter.add_quantities(2, None, 3, None)
        assert (result.quantity, result.unit) == (5, "")

    def test_incompatible(self, converter):
        with pytest.raises(ValueError):
            converter.add_quantities(1, "cup", 100, "ml")
