"""
Portion - Ingredient Parser.

Parses raw ingredient lines into structured data.
Handles "2 cups flour", "1/2 lb beef", "2-3 cloves garlic",
"onion, finely diced", "salt to taste" and the {scale} marker.

The parser never raises on malformed text: anything it cannot recognize
stays in the name.
"""

import re

from portion.ingredients.quantity import match_leading_quantity
from portion.ingredients.vocabulary import DEFAULT_VOCABULARY, UnitVocabulary
from portion.models import ParsedIngredient

SCALE_MARKER = re.compile(r"\{scale\}", re.IGNORECASE)
_PAREN_NOTES = re.compile(r"^(.+?)\s*\(([^)]+)\)\s*$")
_COMMA_NOTES = re.compile(r"^(.+?),\s*(.+)$")
_LIST_ITEM = re.compile(r"^[-*]\s+(.+)$")


def remove_scale_marker(text: str) -> tuple[str, bool]:
    """Strip the first {scale} marker. Returns (text, had_marker)."""
    has_marker = SCALE_MARKER.search(text) is not None
    return SCALE_MARKER.sub("", text, count=1).strip(), has_marker


def extract_quantity(text: str) -> tuple[float | None, float | None, str]:
    """
    Extract a leading quantity or range.

    Returns:
        Tuple of (quantity, quantity_max, remaining_text)
    """
    trimmed = text.strip()
    token = match_leading_quantity(trimmed)
    if token is None:
        return None, None, trimmed
    return token.quantity, token.quantity_max, trimmed[len(token.text):].strip()


def extract_unit(text: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY) -> tuple[str | None, str]:
    """
    Extract a leading unit from the closed vocabulary.

    Returns:
        Tuple of (lowercased unit or None, remaining_text)
    """
    trimmed = text.strip()
    match = vocabulary.unit_pattern.match(trimmed)
    if not match:
        return None, trimmed
    return match.group(1).lower(), trimmed[len(match.group(0)):].strip()


def extract_notes(text: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY) -> tuple[str, str | None]:
    """
    Split trailing notes off the ingredient name.

    A trailing parenthetical is always a note. A comma clause only counts
    when it starts with a preparation word, so "salt, pepper" stays intact.
    """
    paren = _PAREN_NOTES.match(text)
    if paren:
        return paren.group(1).strip(), paren.group(2).strip()

    comma = _COMMA_NOTES.match(text)
    if comma:
        name, notes = comma.group(1).strip(), comma.group(2).strip()
        if vocabulary.preparation_pattern.match(notes):
            return name, notes

    return text.strip(), None


def is_scalable(
    unit: str | None,
    notes: str | None,
    name: str,
    vocabulary: UnitVocabulary = DEFAULT_VOCABULARY,
) -> bool:
    """Whether an ingredient should change with the serving count."""
    text = " ".join(part for part in (notes, name) if part)
    if any(pattern.search(text) for pattern in vocabulary.non_scaling_patterns):
        return False

    if vocabulary.is_approximate(unit):
        return False

    return True


def parse_ingredient(raw: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY) -> ParsedIngredient:
    """
    Parse a raw ingredient string into structured data.

    Examples:
        "2 cups all-purpose flour"
            -> quantity=2, unit="cups", name="all-purpose flour", scalable=True
        "1/2 - 1 tsp salt"
            -> quantity=0.5, quantity_max=1, unit="tsp", name="salt"
        "salt to taste"
            -> name="salt to taste", scalable=False
    """
    if not raw or not isinstance(raw, str):
        return ParsedIngredient(raw="", name="", scalable=False)

    cleaned, has_marker = remove_scale_marker(raw)
    quantity, quantity_max, after_quantity = extract_quantity(cleaned)
    unit, after_unit = extract_unit(after_quantity, vocabulary)
    name, notes = extract_notes(after_unit, vocabulary)

    scalable = has_marker or is_scalable(unit, notes, name, vocabulary)

    return ParsedIngredient(
        raw=raw.strip(),
        quantity=quantity,
        quantity_max=quantity_max,
        unit=unit,
        name=name or raw.strip(),
        notes=notes,
        scalable=scalable,
    )


def parse_ingredients(lines: list[str], vocabulary: UnitVocabulary = DEFAULT_VOCABULARY) -> list[ParsedIngredient]:
    """Parse multiple ingredient strings."""
    return [parse_ingredient(line, vocabulary) for line in lines]


def parse_ingredients_from_markdown(
    markdown: str, vocabulary: UnitVocabulary = DEFAULT_VOCABULARY
) -> list[ParsedIngredient]:
    """
    Parse ingredients from a markdown list.

    Only lines starting with "- " or "* " are ingredients; headings and
    prose in between are skipped.
    """
    ingredients = []
    for line in markdown.split("\n"):
        match = _LIST_ITEM.match(line.strip())
        if match:
            ingredients.append(parse_ingredient(match.group(1), vocabulary))
    return ingredients
