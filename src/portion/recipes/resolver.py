"""
Portion - Component Reference Resolver.

Resolves components that borrow their content from another recipe
("@include:base#sauce") into fully inlined components.

For each referenced component:
1. Load the source recipe for the locale
2. Resolve the source recipe's own references first (depth-first)
3. Find the referenced component by slug
4. Copy timing, ingredients and instructions; keep the local name
5. Record the source recipe's servings so quantities scale correctly

The resolution stack is an immutable tuple of recipe slugs handed down to
each recursive call, so concurrent resolutions never share state.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from portion.config import get_settings
from portion.models import Recipe, RecipeComponent
from portion.recipes.timing import components_total_time

logger = logging.getLogger(__name__)

RecipeLookup = Callable[[str, str], Awaitable[Recipe | None]]


class ComponentReferenceError(Exception):
    """A component reference could not be resolved."""


def recipe_has_references(recipe: Recipe) -> bool:
    return any(component.reference for component in recipe.components or [])


def check_resolution_stack(slug: str, resolution_stack: tuple[str, ...], max_depth: int) -> None:
    """
    Guard against cycles and runaway nesting before resolving slug.

    Raises:
        ComponentReferenceError: If slug is already being resolved, or the
            stack has reached max_depth
    """
    if slug in resolution_stack:
        cycle = " → ".join([*resolution_stack, slug])
        raise ComponentReferenceError(f"Circular component reference detected: {cycle}")

    if len(resolution_stack) >= max_depth:
        path = " → ".join(resolution_stack)
        raise ComponentReferenceError(f"Maximum reference depth ({max_depth}) exceeded: {path}")


async def _load_source_recipe(get_recipe_by_slug: RecipeLookup, slug: str, locale: str) -> Recipe:
    try:
        source = await get_recipe_by_slug(slug, locale)
    except ComponentReferenceError:
        raise
    except Exception as e:
        raise ComponentReferenceError(f'Source recipe "{slug}" not found for locale "{locale}"') from e

    if source is None:
        raise ComponentReferenceError(f'Source recipe "{slug}" not found for locale "{locale}"')
    return source


async def _resolve_component(
    component: RecipeComponent,
    recipe: Recipe,
    get_recipe_by_slug: RecipeLookup,
    locale: str,
    max_depth: int,
    resolution_stack: tuple[str, ...],
) -> RecipeComponent:
    reference = component.reference
    if reference is None:
        return component

    if reference.type != "recipe":
        raise ComponentReferenceError(
            f"Component library references not yet supported: @include:component:{reference.component_slug}"
        )

    source = await _load_source_recipe(get_recipe_by_slug, reference.recipe_slug, locale)

    if recipe_has_references(source):
        source = await resolve_component_references(
            source,
            get_recipe_by_slug,
            locale=locale,
            max_depth=max_depth,
            resolution_stack=(*resolution_stack, recipe.slug),
        )

    source_component = next(
        (c for c in source.components or [] if c.slug == reference.component_slug),
        None,
    )
    if source_component is None:
        available = [f"{c.slug} ({c.name})" for c in source.components or [] if c.slug]
        raise ComponentReferenceError(
            f'Component with slug "{reference.component_slug}" not found in recipe "{reference.recipe_slug}". '
            f"Available components with slugs: {', '.join(available) if available else 'none'}"
        )

    logger.debug(f"Resolved {recipe.slug}/{component.name} from {source.slug}#{source_component.slug}")

    # Local name and slug stay (the name may be translated); content comes from the source
    return RecipeComponent(
        name=component.name,
        slug=component.slug,
        prep_time=source_component.prep_time,
        cook_time=source_component.cook_time,
        wait_time=source_component.wait_time,
        ingredients=[i.model_copy(deep=True) for i in source_component.ingredients],
        instructions=list(source_component.instructions),
        reference=reference.model_copy(update={"source_servings": source.servings}),
    )


async def resolve_component_references(
    recipe: Recipe,
    get_recipe_by_slug: RecipeLookup,
    *,
    locale: str | None = None,
    max_depth: int | None = None,
    resolution_stack: tuple[str, ...] = (),
) -> Recipe:
    """
    Resolve all component references in a recipe.

    Args:
        recipe: Recipe with potential component references
        get_recipe_by_slug: Async lookup (slug, locale) -> Recipe | None
        locale: Locale to load source recipes in (default from settings)
        max_depth: Maximum nesting of references (default from settings)
        resolution_stack: Slugs of the recipes currently being resolved

    Returns:
        New recipe with every referenced component filled in, or the same
        recipe when nothing is referenced

    Raises:
        ComponentReferenceError: On a missing source recipe or component,
            a circular reference, or when max_depth is exceeded
    """
    if locale is None:
        locale = get_settings().portion_default_locale
    if max_depth is None:
        max_depth = get_settings().portion_max_reference_depth

    resolution_stack = tuple(resolution_stack)
    check_resolution_stack(recipe.slug, resolution_stack, max_depth)

    if not recipe_has_references(recipe):
        return recipe

    logger.info(f"Resolving component references for {recipe.slug} (depth {len(resolution_stack)})")

    resolved = await asyncio.gather(
        *(
            _resolve_component(component, recipe, get_recipe_by_slug, locale, max_depth, resolution_stack)
            for component in recipe.components
        )
    )
    components = list(resolved)

    total_time = components_total_time(components) if components else recipe.total_time

    return recipe.model_copy(update={"components": components, "total_time": total_time})
