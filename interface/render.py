from collections import Counter

from constants import (
    Flavor,
    MealPower,
    PowerType,
)
from models.recipe import power_to_string


def _grouped(
    ingredients,
):
    """``"2x Chorizo, Salt"`` preserving first-use order."""
    counts = Counter(ingredient.name for ingredient in ingredients)
    return ", ".join(
        f"{count}x {name}" if count > 1 else name for name, count in counts.items()
    )


def _nonzero(
    vector,
    enum_cls,
):
    return ", ".join(
        f"{enum_cls(index).name.title()} {amount:g}"
        for index, amount in enumerate(vector)
        if amount
    )


def display_powers(
    powers,
):
    """Print realized powers, one per line."""
    if not powers:
        print("  (no powers)")
        return
    for place, power in enumerate(powers, 1):
        print(f"  {place}. {power_to_string(power)}")


def display_recipe(
    recipe,
    title: str = "RECIPE",
    show_vectors: bool = False,
    notices: list[str] | None = None,
):
    """Pretty-print a recipe.

    Parameters
    ----------
    recipe : Recipe or None
        Recipe to display; ``None`` prints a not-found line.
    title : str, optional
        Banner text.
    show_vectors : bool, optional
        Also print the accumulated meal power, type and flavor amounts.
    notices : list of str, optional
        Lines to print above the recipe (e.g., budget exhausted).
    """
    if notices:
        for note in notices:
            print(f"Note: {note}")
    if recipe is None:
        print("No recipe found.")
        return

    print(f"========== {title} ==========")
    print(f" Fillings:   {_grouped(recipe.fillings) or '-'}")
    print(f" Condiments: {_grouped(recipe.condiments) or '-'}")
    if recipe.herba_count:
        print(f" Herba mystica: {recipe.herba_count}")
    print(" Powers:")
    display_powers(recipe.powers)
    if show_vectors and recipe.meal_power_vector:
        print(f" Meal powers: {_nonzero(recipe.meal_power_vector, MealPower)}")
        print(f" Types:       {_nonzero(recipe.type_vector, PowerType)}")
        print(f" Flavors:     {_nonzero(recipe.flavor_vector, Flavor)}")
    print("=" * (len(title) + 22))


def display_catalog(
    ingredients,
    role: str | None = None,
):
    """Print catalog entries as an aligned table."""
    rows = [i for i in ingredients if role is None or i.role.value == role]
    if not rows:
        print("No ingredients.")
        return

    name_width = max(len(i.name) for i in rows)
    for ingredient in rows:
        tag = "herba" if ingredient.is_herba else ingredient.role.value
        print(
            f" {ingredient.name:<{name_width}}  {tag:<9}  "
            f"x{ingredient.pieces:<2}  {_nonzero(ingredient.type_vector, PowerType)}"
        )
    print(f"{len(rows)} ingredient(s)")
