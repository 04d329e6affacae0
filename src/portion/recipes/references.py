"""
Portion - Component Reference Syntax.

Recipe documents borrow a component from another recipe with a line like

    @include:pasta-base#tomato-sauce

and name their own components for others to borrow with

    slug: tomato-sauce

"@include:component:<slug>" is the syntax reserved for a shared
component library.
"""

import re

from portion.models import SLUG_PATTERN, ComponentReference

INCLUDE_PREFIX = "@include:"
LIBRARY_PREFIX = "component:"

_SLUG = re.compile(SLUG_PATTERN)
_SLUG_LINE = re.compile(r"^slug:\s*(\S+)\s*$", re.IGNORECASE)


def is_valid_slug(text: str) -> bool:
    """Lowercase words joined by single hyphens, e.g. "tomato-sauce"."""
    return bool(text) and _SLUG.match(text) is not None


def parse_component_reference(text: str) -> ComponentReference | None:
    """
    Parse an @include directive.

    Examples:
        "@include:base#sauce" -> ComponentReference(type="recipe", recipe_slug="base", component_slug="sauce")
        "@include:component:pesto" -> ComponentReference(type="library", ...)
        "Simmer for 10 minutes" -> None

    Raises:
        ValueError: If the directive is present but malformed
    """
    stripped = text.strip()
    if not stripped.startswith(INCLUDE_PREFIX):
        return None

    target = stripped[len(INCLUDE_PREFIX):].strip()

    if target.startswith(LIBRARY_PREFIX):
        slug = target[len(LIBRARY_PREFIX):]
        if not is_valid_slug(slug):
            raise ValueError(f"Invalid component slug in '{stripped}'")
        return ComponentReference(type="library", recipe_slug=slug, component_slug=slug)

    recipe_slug, separator, component_slug = target.partition("#")
    if not separator:
        raise ValueError(f"Missing '#<component-slug>' in '{stripped}'")
    if not is_valid_slug(recipe_slug):
        raise ValueError(f"Invalid recipe slug '{recipe_slug}' in '{stripped}'")
    if not is_valid_slug(component_slug):
        raise ValueError(f"Invalid component slug '{component_slug}' in '{stripped}'")

    return ComponentReference(type="recipe", recipe_slug=recipe_slug, component_slug=component_slug)


def parse_component_slug(line: str) -> str | None:
    """
    Parse a "slug: <component-slug>" metadata line.

    Raises:
        ValueError: If the line names an invalid slug
    """
    match = _SLUG_LINE.match(line.strip())
    if not match:
        return None

    slug = match.group(1)
    if not is_valid_slug(slug):
        raise ValueError(f"Invalid component slug '{slug}'")
    return slug
