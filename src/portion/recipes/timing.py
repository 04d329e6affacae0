"""Total time of component-based recipes."""

from portion.models import RecipeComponent


def component_time(component: RecipeComponent) -> int:
    """Active time (prep + cook) or passive wait time, whichever is longer."""
    active = (component.prep_time or 0) + (component.cook_time or 0)
    return max(active, component.wait_time or 0)


def components_total_time(components: list[RecipeComponent]) -> int:
    return sum(component_time(c) for c in components)
