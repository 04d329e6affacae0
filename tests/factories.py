"""Shorthand constructors for test data."""

from portion.models import ComponentReference, ParsedIngredient, Recipe, RecipeComponent


def ingredient(name: str, quantity: float | None = None, unit: str | None = None, **kwargs) -> ParsedIngredient:
    """Structured ingredient; raw text is rebuilt from the parts."""
    raw = " ".join(str(part) for part in (quantity, unit, name) if part is not None)
    return ParsedIngredient(raw=raw, name=name, quantity=quantity, unit=unit, **kwargs)


def recipe(slug: str, servings: int = 4, **kwargs) -> Recipe:
    """Recipe whose title defaults to a readable form of the slug."""
    kwargs.setdefault("title", slug.replace("-", " ").title())
    return Recipe(slug=slug, servings=servings, **kwargs)


def referencing(name: str, recipe_slug: str, component_slug: str, **kwargs) -> RecipeComponent:
    """A component that borrows its content from another recipe."""
    return RecipeComponent(
        name=name,
        reference=ComponentReference(recipe_slug=recipe_slug, component_slug=component_slug),
        **kwargs,
    )
