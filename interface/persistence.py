"""Persistence and integrity logging utilities.

Provides JSON load/save for the ingredient catalog and logs a
diagnostic summary of data issues.

Exports
-------
read_ingredient_catalog
save_ingredient_catalog
log_catalog_issues
load_catalog

Notes
-----
JSON I/O is UTF-8. Deduplication during save and load is case-
insensitive by Name. Loading here is lenient (log and continue);
`catalog.IngredientCatalog.from_file` is the strict counterpart that
raises on the same data.
"""

import json
import logging

from catalog import (
    DEFAULT_CATALOG_PATH,
    IngredientCatalog,
)
from constants import (
    MealPower,
)
from models.ingredient import (
    Ingredient,
)

logger = logging.getLogger(__name__)

DATA_PATH = DEFAULT_CATALOG_PATH


def read_ingredient_catalog(
    path,
):
    """Load ingredient data from a JSON file into `Ingredient` objects.

    Parameters
    ----------
    path : str | os.PathLike
        Path to the JSON file.

    Returns
    -------
    list[Ingredient]
        Parsed ingredients. Returns an empty list if the document or
        any entry is malformed.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.

    Notes
    -----
    The input JSON is expected to be a list of dicts compatible
    with ``Ingredient.from_dict``.
    """

    # Fail soft on content (log + return []) so the CLI can report it
    with open(
        path,
        "r",
        encoding="utf-8",
    ) as in_file:
        try:
            data = json.load(in_file)
            return [Ingredient.from_dict(entry) for entry in data]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error("Failed to read ingredient data from %s: %s", path, exc)
            return []


def save_ingredient_catalog(
    ingredient_list,
    path,
):
    """Save a deduplicated list of ingredient dicts to a JSON file.

    Parameters
    ----------
    ingredient_list : list[dict]
        Ingredients as dictionaries. Each entry must include a ``"Name"`` key.
    path : str | os.PathLike
        Destination file path.

    Notes
    -----
    Deduplication is case-insensitive by ``"Name"``. Only the last
    occurrence of each name is kept.
    """

    # Last occurrence wins (dict overwrites by key)
    unique_by_name = {}
    for entry in ingredient_list:
        unique_by_name[entry["Name"].lower()] = entry
    with open(
        path,
        "w",
        encoding="utf-8",
    ) as out_file:
        json.dump(
            list(unique_by_name.values()),
            out_file,
            indent=2,
        )


def log_catalog_issues(
    ingredients,
):
    """Log data integrity issues for a list of ingredients.

    Parameters
    ----------
    ingredients : list[Ingredient]
        Loaded ingredients.

    Returns
    -------
    list[str]
        One line per issue (also logged as warnings):
        - duplicate names (case-insensitive)
        - herba mystica without Sparkling or Title power
        - ingredients contributing nothing at all
        - fillings without any type contribution
    """
    issues = []

    seen = set()
    for ingredient in ingredients:
        key = ingredient.name.lower()
        if key in seen:
            issues.append(f"Duplicate ingredient name: {ingredient.name}")
        seen.add(key)

    for ingredient in ingredients:
        if ingredient.is_herba and not (
            ingredient.meal_power_vector[MealPower.SPARKLING]
            or ingredient.meal_power_vector[MealPower.TITLE]
        ):
            issues.append(f"Herba mystica without Sparkling/Title: {ingredient.name}")
        if not any(
            ingredient.meal_power_vector
            + ingredient.type_vector
            + ingredient.flavor_vector
        ):
            issues.append(f"Ingredient contributes nothing: {ingredient.name}")
        elif ingredient.is_filling and not any(ingredient.type_vector):
            issues.append(f"Filling without types: {ingredient.name}")

    for issue in issues:
        logger.warning(issue)
    if not issues:
        logger.info("No catalog issues found in %d ingredients", len(ingredients))
    return issues


def load_catalog(
    path=None,
):
    """Load, check and index the ingredient catalog.

    Parameters
    ----------
    path : str | os.PathLike, optional
        Catalog file; ``DATA_PATH`` when omitted.

    Returns
    -------
    IngredientCatalog
        Catalog in file order. Later duplicates of a name are dropped
        (after being logged by `log_catalog_issues`).
    """
    ingredients = read_ingredient_catalog(path or DATA_PATH)
    log_catalog_issues(ingredients)

    unique = {}
    for ingredient in ingredients:
        unique.setdefault(ingredient.name.lower(), ingredient)
    return IngredientCatalog(unique.values())
