"""
Pytest configuration and fixtures for Portion tests.
"""

import os

import pytest

# Set test environment before importing portion modules
os.environ["PORTION_ENV"] = "development"
os.environ.pop("PORTION_MAX_REFERENCE_DEPTH", None)
os.environ.pop("PORTION_DEFAULT_LOCALE", None)

from portion.config import get_settings
from factories import ingredient, recipe
from portion.models import Recipe, RecipeComponent
from portion.recipes.repository import InMemoryRecipeRepository


@pytest.fixture(autouse=True)
def fresh_settings():
    """Clear cached settings so env overrides in a test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_recipe() -> Recipe:
    """Simple recipe with top-level ingredients and annotated instructions."""
    return recipe(
        "pancakes",
        servings=4,
        title="Pancakes",
        ingredients=[
            ingredient("flour", 200, "g"),
            ingredient("milk", 300, "ml"),
            ingredient("eggs", 2),
            ingredient("salt", notes="to taste", scalable=False),
        ],
        instructions=[
            "Whisk {{200g}} flour with {{300ml}} milk.",
            "Rest for {{30 minutes}}.",
        ],
    )


@pytest.fixture
def base_recipe() -> Recipe:
    """Component-based recipe others borrow from."""
    return recipe(
        "base",
        servings=2,
        components=[
            RecipeComponent(
                name="Tomato Sauce",
                slug="sauce",
                prep_time=10,
                cook_time=20,
                wait_time=5,
                ingredients=[ingredient("tomatoes", 400, "g"), ingredient("garlic", 2, "cloves")],
                instructions=["Simmer {{400g}} tomatoes for {{20 minutes}}."],
            ),
            RecipeComponent(
                name="Dough",
                slug="dough",
                prep_time=15,
                wait_time=60,
                ingredients=[ingredient("flour", 500, "g")],
                instructions=["Knead and rest."],
            ),
        ],
    )


@pytest.fixture
def repository(base_recipe) -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository({"en": [base_recipe]})
