import pathlib
import sys

import pytest  # pyright: ignore[reportMissingImports]

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog import IngredientCatalog  # noqa: E402
from config import Config  # noqa: E402
from constants import (  # noqa: E402
    NUM_FLAVORS,
    NUM_MEAL_POWERS,
    NUM_TYPES,
    Flavor,
    MealPower,
    PowerType,
)
from models.ingredient import Ingredient  # noqa: E402


def _vector(
    length,
    amounts,
):
    values = [0] * length
    for index, amount in (amounts or {}).items():
        values[index] = amount
    return values


def make_ingredient(
    name,
    role="filling",
    meal_powers=None,
    types=None,
    flavors=None,
    pieces=1,
    is_herba=False,
):
    """Build an Ingredient from sparse ``{enum member: amount}`` dicts."""
    return Ingredient(
        name,
        role,
        _vector(NUM_MEAL_POWERS, meal_powers),
        _vector(NUM_TYPES, types),
        _vector(NUM_FLAVORS, flavors),
        pieces=pieces,
        is_herba=is_herba,
    )


def make_herba(
    name="Herba Mystica",
):
    return make_ingredient(
        name,
        "condiment",
        meal_powers={MealPower.SPARKLING: 1000, MealPower.TITLE: 1000},
        types={t: 250 for t in PowerType},
        flavors={
            Flavor.SWEET: 500,
            Flavor.SALTY: 300,
            Flavor.SOUR: 300,
            Flavor.BITTER: 300,
            Flavor.HOT: 300,
        },
        is_herba=True,
    )


def sample_ingredients():
    """Small catalog whose search results are checked by hand in the tests."""
    return [
        make_herba(),
        make_ingredient(
            "Chorizo",
            meal_powers={MealPower.ENCOUNTER: 30},
            types={PowerType.FIRE: 190},
            flavors={Flavor.SALTY: 20, Flavor.HOT: 10},
        ),
        make_ingredient(
            "Rice",
            meal_powers={MealPower.CATCH: 10},
            types={PowerType.NORMAL: 36},
            flavors={Flavor.SWEET: 4},
        ),
        make_ingredient(
            "Ground Meat",
            meal_powers={MealPower.ENCOUNTER: 12},
            types={PowerType.GROUND: 36},
            flavors={Flavor.SALTY: 5},
        ),
        make_ingredient(
            "Salt",
            "condiment",
            meal_powers={MealPower.ENCOUNTER: 7},
            types={PowerType.NORMAL: 2},
            flavors={Flavor.SALTY: 20},
        ),
    ]


@pytest.fixture
def sample_catalog():
    return IngredientCatalog(sample_ingredients())


@pytest.fixture
def honey():
    return make_ingredient(
        "Honey",
        "condiment",
        meal_powers={MealPower.EGG: 5},
        types={PowerType.BUG: 4},
        flavors={Flavor.SWEET: 20},
    )


@pytest.fixture
def default_config():
    """Built-in defaults, independent of any YAML file on disk."""
    return Config()
