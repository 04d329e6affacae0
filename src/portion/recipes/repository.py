"""
Portion - In-memory Recipe Repository.

Holds recipes keyed by (locale, slug) and exposes the async lookup the
reference resolver expects. Used by the CLI and the tests; loading and
storing recipe documents is the host application's business.
"""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from portion.models import Recipe

logger = logging.getLogger(__name__)

_RECIPE_LIST = TypeAdapter(list[Recipe])


class InMemoryRecipeRepository:
    """Recipe lookup backed by a dict."""

    def __init__(self, recipes: dict[str, list[Recipe]] | None = None):
        self._recipes: dict[tuple[str, str], Recipe] = {}
        for locale, items in (recipes or {}).items():
            for recipe in items:
                self.add(recipe, locale)

    def add(self, recipe: Recipe, locale: str) -> None:
        self._recipes[(locale, recipe.slug)] = recipe

    def slugs(self, locale: str) -> list[str]:
        return sorted(slug for (loc, slug) in self._recipes if loc == locale)

    async def get_recipe_by_slug(self, slug: str, locale: str) -> Recipe | None:
        recipe = self._recipes.get((locale, slug))
        if recipe is None:
            logger.debug(f"No recipe '{slug}' for locale '{locale}'")
        return recipe

    @classmethod
    def from_json(cls, source: str | Path, locale: str) -> "InMemoryRecipeRepository":
        """
        Load a JSON list of recipes.

        Args:
            source: Path to a JSON file
            locale: Locale the recipes are written in

        Raises:
            pydantic.ValidationError: If a recipe is malformed
        """
        data = json.loads(Path(source).read_text(encoding="utf-8"))
        repository = cls()
        for recipe in _RECIPE_LIST.validate_python(data):
            repository.add(recipe, locale)
        logger.info(f"Loaded {len(repository._recipes)} recipes from {source}")
        return repository
