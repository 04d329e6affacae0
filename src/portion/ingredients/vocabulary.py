"""
Portion - Ingredient Vocabulary.

Closed word lists used by the parser and the instruction scaler.
Bundled in UnitVocabulary so callers can pass an extended copy
instead of patching module globals.
"""

import re
from dataclasses import dataclass
from functools import cached_property

# Unit categories
VOLUME_UNITS = (
    "ml", "l", "liter", "liters",
    "cup", "cups",
    "tbsp", "tablespoon", "tablespoons",
    "tsp", "teaspoon", "teaspoons",
    "fl oz", "fluid ounce", "fluid ounces",
    "pint", "pints", "quart", "quarts", "gallon", "gallons",
)
WEIGHT_UNITS = (
    "g", "gram", "grams",
    "kg", "kilogram", "kilograms",
    "oz", "ounce", "ounces",
    "lb", "lbs", "pound", "pounds",
)
COUNT_UNITS = (
    "piece", "pieces", "slice", "slices",
    "clove", "cloves", "head", "heads",
    "bunch", "bunches", "sprig", "sprigs",
    "leaf", "leaves", "stalk", "stalks",
    "can", "cans", "jar", "jars",
    "package", "packages", "packet", "packets",
)
# Quantities nobody measures precisely; never scaled
APPROXIMATE_UNITS = (
    "pinch", "pinches", "dash", "dashes",
    "handful", "handfuls", "splash", "some", "to taste",
)

# Fractional part -> display fraction
COMMON_FRACTIONS = {
    0.125: "1/8",
    0.25: "1/4",
    0.333: "1/3",
    0.375: "3/8",
    0.5: "1/2",
    0.625: "5/8",
    0.666: "2/3",
    0.75: "3/4",
    0.875: "7/8",
}
FRACTION_TOLERANCE = 0.05

# Comma clauses starting with one of these are notes, not part of the name
PREPARATION_WORDS = (
    "finely", "roughly", "thinly", "freshly", "coarsely",
    "diced", "chopped", "minced", "sliced", "grated", "peeled", "crushed",
    "optional", "to taste", "room temperature", "softened", "melted",
)

# Phrases in name/notes that make an ingredient fixed regardless of servings
NON_SCALING_PHRASES = (
    r"to taste",
    r"as needed",
    r"optional",
    r"for (garnish|serving|decoration)",
)

# Instruction annotation units that never scale
TIME_UNITS = frozenset({
    "minute", "minutes", "min", "mins",
    "hour", "hours", "hr", "hrs",
    "second", "seconds", "sec", "secs",
})
TEMPERATURE_UNITS = frozenset({
    "°c", "°f", "c", "f", "degree", "degrees", "celsius", "fahrenheit",
})
NON_SCALING_UNITS = TIME_UNITS | TEMPERATURE_UNITS


@dataclass(frozen=True)
class UnitVocabulary:
    """Word lists the ingredient parser matches against."""

    volume_units: tuple[str, ...] = VOLUME_UNITS
    weight_units: tuple[str, ...] = WEIGHT_UNITS
    count_units: tuple[str, ...] = COUNT_UNITS
    approximate_units: tuple[str, ...] = APPROXIMATE_UNITS
    preparation_words: tuple[str, ...] = PREPARATION_WORDS
    non_scaling_phrases: tuple[str, ...] = NON_SCALING_PHRASES

    @property
    def all_units(self) -> tuple[str, ...]:
        return self.volume_units + self.weight_units + self.count_units + self.approximate_units

    def is_approximate(self, unit: str | None) -> bool:
        return bool(unit) and unit.lower() in self.approximate_units

    @cached_property
    def unit_pattern(self) -> re.Pattern:
        """Leading unit, longest first so "tablespoons" wins over "tbsp"-style prefixes."""
        units = sorted(set(self.all_units), key=len, reverse=True)
        alternation = "|".join(re.escape(u) for u in units)
        return re.compile(rf"^({alternation})\b", re.IGNORECASE)

    @cached_property
    def preparation_pattern(self) -> re.Pattern:
        alternation = "|".join(re.escape(w) for w in self.preparation_words)
        return re.compile(rf"^({alternation})", re.IGNORECASE)

    @cached_property
    def non_scaling_patterns(self) -> tuple[re.Pattern, ...]:
        return tuple(re.compile(p, re.IGNORECASE) for p in self.non_scaling_phrases)


DEFAULT_VOCABULARY = UnitVocabulary()
