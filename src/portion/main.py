"""
Portion - CLI Entry Point.

Usage:
    portion parse "2-3 cloves garlic" "salt to taste"
    portion scale recipes.json pasta --servings 6
    portion resolve recipes.json pasta
    portion share "Weekend" pasta=4 salad=2
    portion shopping recipes.json <encoded>
    portion --help
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from portion.ingredients.formatting import format_quantity_range
from portion.ingredients.parser import parse_ingredients
from portion.ingredients.scaling import component_base_servings, format_scaled_ingredient, scale_ingredients
from portion.instructions.scaler import scale_instructions
from portion.models import Recipe, ShoppingListData
from portion.recipes.repository import InMemoryRecipeRepository
from portion.recipes.resolver import ComponentReferenceError, resolve_component_references
from portion.shopping.aggregation import IngredientAggregator
from portion.shopping.encoder import ShoppingListEncoder

app = typer.Typer(
    name="portion",
    help="Portion - Parse, scale and combine recipe quantities.",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

LocaleOption = typer.Option(None, "--locale", "-L", help="Recipe locale (default from settings)")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Configure logging for every command."""
    from portion.config import settings

    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console,
                rich_tracebacks=settings.is_development,
                show_path=settings.is_development,
            )
        ],
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(code=1)


def _locale(locale: str | None) -> str:
    from portion.config import settings

    return locale or settings.portion_default_locale


async def _load_resolved(repository: InMemoryRecipeRepository, slug: str, locale: str) -> Recipe:
    recipe = await repository.get_recipe_by_slug(slug, locale)
    if recipe is None:
        available = ", ".join(repository.slugs(locale)) or "none"
        raise ValueError(f"Recipe '{slug}' not found for locale '{locale}'. Available recipes: {available}")
    return await resolve_component_references(recipe, repository.get_recipe_by_slug, locale=locale)


@app.command()
def parse(
    lines: list[str] = typer.Argument(..., help="Ingredient lines to parse"),
) -> None:
    """Show how ingredient lines are parsed."""
    table = Table(title="Parsed ingredients")
    for column in ("Quantity", "Unit", "Name", "Notes", "Scalable"):
        table.add_column(column)

    for ingredient in parse_ingredients(lines):
        table.add_row(
            format_quantity_range(ingredient.quantity, ingredient.quantity_max),
            ingredient.unit or "",
            ingredient.name,
            ingredient.notes or "",
            "yes" if ingredient.scalable else "no",
        )

    console.print(table)


@app.command()
def scale(
    catalog: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a list of recipes"),
    slug: str = typer.Argument(..., help="Recipe to scale"),
    servings: int = typer.Option(..., "--servings", "-s", help="Target servings"),
    locale: Optional[str] = LocaleOption,
) -> None:
    """Scale a recipe's ingredients and instructions to a serving count."""
    locale = _locale(locale)
    try:
        repository = InMemoryRecipeRepository.from_json(catalog, locale)
        recipe = asyncio.run(_load_resolved(repository, slug, locale))

        console.print(f"\n[bold green]{recipe.title or recipe.slug}[/bold green] ({recipe.servings} → {servings} servings)")

        sections = [(None, recipe.servings, recipe.ingredients, recipe.instructions)]
        for component in recipe.components or []:
            base = component_base_servings(component, recipe.servings)
            sections.append((component.name, base, component.ingredients, component.instructions))

        for name, base, ingredients, instructions in sections:
            if not ingredients and not instructions:
                continue
            if name:
                console.print(f"\n[bold]{name}[/bold]")
            for ingredient in scale_ingredients(ingredients, base, servings):
                console.print(f"  • {format_scaled_ingredient(ingredient)}")
            for number, step in enumerate(scale_instructions(instructions, base, servings), start=1):
                console.print(f"  {number}. {step}")

    except (ComponentReferenceError, ValueError) as e:
        _fail(str(e))


@app.command()
def resolve(
    catalog: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a list of recipes"),
    slug: str = typer.Argument(..., help="Recipe to resolve"),
    locale: Optional[str] = LocaleOption,
) -> None:
    """Print a recipe with all component references inlined, as JSON."""
    locale = _locale(locale)
    try:
        repository = InMemoryRecipeRepository.from_json(catalog, locale)
        recipe = asyncio.run(_load_resolved(repository, slug, locale))
    except (ComponentReferenceError, ValueError) as e:
        _fail(str(e))

    console.print_json(recipe.model_dump_json(exclude_none=True))


@app.command()
def share(
    title: str = typer.Argument(..., help="Shopping list title"),
    recipes: list[str] = typer.Argument(..., help="Recipes as slug=servings"),
    origin: Optional[str] = typer.Option(None, "--origin", help="Site origin to build a full URL"),
    locale: Optional[str] = LocaleOption,
) -> None:
    """Encode a shopping list payload for sharing."""
    references = []
    for item in recipes:
        slug, separator, servings = item.partition("=")
        if not separator or not servings.isdigit():
            _fail(f"Expected slug=servings, got '{item}'")
        references.append({"slug": slug, "servings": int(servings)})

    encoder = ShoppingListEncoder()
    try:
        data = ShoppingListData(title=title, recipes=references)
    except ValueError as e:
        _fail(str(e))

    if origin:
        typer.echo(encoder.generate_url(data, _locale(locale), origin))
    else:
        typer.echo(encoder.encode(data))


@app.command()
def shopping(
    catalog: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a list of recipes"),
    encoded: str = typer.Argument(..., help="Encoded shopping list payload"),
    locale: Optional[str] = LocaleOption,
) -> None:
    """Build the merged shopping list for a shared payload."""
    locale = _locale(locale)
    data = ShoppingListEncoder().decode(encoded)
    if data is None:
        _fail("Invalid shopping list payload")

    async def load_all() -> list[Recipe]:
        return list(await asyncio.gather(*(_load_resolved(repository, r.slug, locale) for r in data.recipes)))

    try:
        repository = InMemoryRecipeRepository.from_json(catalog, locale)
        recipes = asyncio.run(load_all())
        items = IngredientAggregator().aggregate(recipes, [r.servings for r in data.recipes])
    except (ComponentReferenceError, ValueError) as e:
        _fail(str(e))

    table = Table(title=data.title)
    for column in ("Item", "Quantity", "Unit", "Notes", "Recipes"):
        table.add_column(column)
    for item in items:
        table.add_row(
            item.display_name,
            format_quantity_range(item.quantity, item.quantity_max),
            item.unit or "",
            item.notes or "",
            ", ".join(source.title or source.slug for source in item.sources),
        )

    console.print(table)


if __name__ == "__main__":
    app()
