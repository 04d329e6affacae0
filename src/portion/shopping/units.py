"""
Portion - Unit Handling.

Reconciles small families of metric units so quantities can be summed
and shown in the most readable unit (1500 ml -> 1.5 L, 2000 g -> 2 kg).
Only metric volume and weight are converted; cups, spoons and counts
are only ever merged with themselves.
"""

from dataclasses import dataclass

# Factors to the base unit of each family
VOLUME_TO_ML = {"ml": 1, "cl": 10, "dl": 100, "l": 1000}
WEIGHT_TO_G = {"mg": 0.001, "g": 1, "kg": 1000}


@dataclass(frozen=True)
class ConversionResult:
    """A quantity with the unit it is expressed in."""

    quantity: float
    unit: str
    converted: bool


def _normalize(unit: str | None) -> str:
    return (unit or "").lower().strip()


class UnitConverter:
    """
    Converts between compatible units.

    Tables map each unit to its factor relative to the family's base unit
    (ml for volume, g for weight). Pass extended tables to support more
    units without touching this class.
    """

    def __init__(
        self,
        volume_units: dict[str, float] | None = None,
        weight_units: dict[str, float] | None = None,
    ):
        self.volume_units = dict(volume_units or VOLUME_TO_ML)
        self.weight_units = dict(weight_units or WEIGHT_TO_G)

    def _family(self, unit: str | None) -> dict[str, float] | None:
        normalized = _normalize(unit)
        for table in (self.volume_units, self.weight_units):
            if normalized in table:
                return table
        return None

    def are_units_compatible(self, unit1: str | None, unit2: str | None) -> bool:
        """
        Check if two units can be merged.

        Args:
            unit1: First unit
            unit2: Second unit

        Returns:
            True if the units are equal or belong to the same family
        """
        if not unit1 or not unit2:
            return False
        if unit1 == unit2:
            return True

        family = self._family(unit1)
        return family is not None and _normalize(unit2) in family

    def convert_to_better_unit(self, quantity: float, unit: str | None) -> ConversionResult:
        """
        Convert a quantity to a more readable unit.

        Args:
            quantity: Numeric quantity
            unit: Unit of measurement

        Returns:
            ConversionResult, converted=True when the unit changed
            (e.g. 1500 ml -> 1.5 L, 2000 g -> 2 kg)
        """
        if not unit:
            return ConversionResult(quantity=quantity, unit=unit or "", converted=False)

        normalized = _normalize(unit)

        if normalized in self.volume_units:
            base_value = quantity * self.volume_units[normalized]
            if base_value >= 1000 and normalized != "l":
                return ConversionResult(quantity=base_value / 1000, unit="L", converted=True)
            return ConversionResult(quantity=quantity, unit=unit, converted=False)

        if normalized in self.weight_units:
            base_value = quantity * self.weight_units[normalized]
            if base_value >= 1000 and normalized != "kg":
                return ConversionResult(quantity=base_value / 1000, unit="kg", converted=True)
            return ConversionResult(quantity=quantity, unit=unit, converted=False)

        return ConversionResult(quantity=quantity, unit=unit, converted=False)

    def convert(self, value: float, from_unit: str, to_unit: str) -> float:
        """
        Convert a value between two units of the same family.

        Args:
            value: Quantity to convert
            from_unit: Source unit
            to_unit: Target unit

        Returns:
            Converted value

        Raises:
            ValueError: If the units are not compatible
        """
        if _normalize(from_unit) == _normalize(to_unit):
            return value

        if not self.are_units_compatible(from_unit, to_unit):
            raise ValueError(f"Cannot convert incompatible units: {from_unit} and {to_unit}")

        family = self._family(from_unit)
        return value * family[_normalize(from_unit)] / family[_normalize(to_unit)]

    def add_quantities(
        self,
        qty1: float,
        unit1: str | None,
        qty2: float,
        unit2: str | None,
    ) -> ConversionResult:
        """
        Add two quantities and express the sum in the most readable unit.

        Args:
            qty1: First quantity
            unit1: Unit of the first quantity
            qty2: Second quantity
            unit2: Unit of the second quantity

        Returns:
            ConversionResult with the sum

        Raises:
            ValueError: If the units are not compatible
        """
        if not unit1 and not unit2:
            return ConversionResult(quantity=qty1 + qty2, unit="", converted=False)

        if unit1 == unit2:
            return self.convert_to_better_unit(qty1 + qty2, unit1)

        if not self.are_units_compatible(unit1, unit2):
            raise ValueError(f"Cannot add incompatible units: {unit1} and {unit2}")

        normalized1, normalized2 = _normalize(unit1), _normalize(unit2)

        if normalized1 in self.volume_units:
            base_value = qty1 * self.volume_units[normalized1] + qty2 * self.volume_units[normalized2]
            return self.convert_to_better_unit(base_value, "ml")

        base_value = qty1 * self.weight_units[normalized1] + qty2 * self.weight_units[normalized2]
        return self.convert_to_better_unit(base_value, "g")
