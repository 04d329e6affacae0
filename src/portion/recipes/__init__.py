"""Portion - Recipe composition: component references and timing."""

from portion.recipes.references import parse_component_reference, parse_component_slug
from portion.recipes.repository import InMemoryRecipeRepository
from portion.recipes.resolver import (
    ComponentReferenceError,
    recipe_has_references,
    resolve_component_references,
)

__all__ = [
    "ComponentReferenceError",
    "InMemoryRecipeRepository",
    "parse_component_reference",
    "parse_component_slug",
    "recipe_has_references",
    "resolve_component_references",
]
