"""
Portion - Domain Entity Models.

Value types shared by the parser, scalers, aggregator and resolver.
They are used for:
- Structured ingredient data produced by the text parser
- Recipes and components handed over by the recipe repository
- Shopping list items and the shareable shopping list payload

All models are frozen: operations build new values instead of mutating.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

SLUG_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"


# =============================================================================
# Ingredients
# =============================================================================


class ParsedIngredient(BaseModel):
    """
    An ingredient line broken into structured fields.

    Ranges such as "2-3 cloves garlic" carry both quantity and quantity_max.
    """

    model_config = ConfigDict(frozen=True)

    raw: str = ""  # Original text
    quantity: float | None = None
    quantity_max: float | None = None  # Upper bound for ranges
    unit: str | None = None
    name: str
    notes: str | None = None  # e.g. "finely chopped", "optional"
    scalable: bool = True

    @model_validator(mode="after")
    def _check_range(self) -> "ParsedIngredient":
        if self.quantity_max is not None:
            if self.quantity is None:
                raise ValueError("quantity_max requires quantity")
            if self.quantity > self.quantity_max:
                raise ValueError(
                    f"quantity ({self.quantity}) exceeds quantity_max ({self.quantity_max})"
                )
        return self


class ScaledIngredient(ParsedIngredient):
    """Ingredient after applying a serving multiplier."""

    scaled_quantity: float | None = None
    scaled_quantity_max: float | None = None
    display_quantity: str = ""  # Formatted for display, e.g. "1/2", "2-3"
    original_servings: float
    target_servings: float


# =============================================================================
# Recipes
# =============================================================================


class ComponentReference(BaseModel):
    """
    Pointer from a component to a component of another recipe.

    type "recipe" borrows from another recipe; "library" is reserved for a
    shared component library (recipe_slug then holds the library slug).
    source_servings is filled in by the resolver.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["recipe", "library"] = "recipe"
    recipe_slug: str = Field(pattern=SLUG_PATTERN)
    component_slug: str = Field(pattern=SLUG_PATTERN)
    source_servings: int | None = None


class RecipeComponent(BaseModel):
    """
    A named sub-recipe such as "Sauce" or "Assembly".

    A component with a reference starts with empty ingredients and
    instructions; the resolver fills them in.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str | None = Field(default=None, pattern=SLUG_PATTERN)
    prep_time: int | None = None  # Active minutes
    cook_time: int | None = None  # Active minutes
    wait_time: int | None = None  # Passive minutes (marinating, chilling)
    ingredients: list[ParsedIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    reference: ComponentReference | None = None


class Recipe(BaseModel):
    """
    A recipe as returned by the recipe repository.

    Either simple (top-level ingredients/instructions) or component-based.
    """

    model_config = ConfigDict(frozen=True)

    slug: str = Field(pattern=SLUG_PATTERN)
    title: str = ""
    servings: int = Field(gt=0)
    prep_time: int | None = None
    cook_time: int | None = None
    wait_time: int | None = None
    total_time: int | None = None
    ingredients: list[ParsedIngredient] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    components: list[RecipeComponent] | None = None


# =============================================================================
# Shopping
# =============================================================================


class IngredientSource(BaseModel):
    """Recipe that contributed to a shopping item."""

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    servings: int


class ShoppingItem(BaseModel):
    """One merged, cross-recipe entry of a shopping list."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str  # Normalized (lowercase, trimmed)
    display_name: str  # Casing of the first occurrence
    quantity: float | None = None
    quantity_max: float | None = None
    unit: str | None = None
    notes: str | None = None
    sources: list[IngredientSource] = Field(min_length=1)


class RecipeReference(BaseModel):
    """Recipe with its requested serving count in a shared shopping list."""

    slug: str = Field(min_length=1)
    servings: int = Field(ge=1, le=100)


class ShoppingListData(BaseModel):
    """Shopping list payload carried in a shareable URL."""

    title: str = Field(min_length=1, max_length=200)
    recipes: list[RecipeReference] = Field(min_length=1)
