"""Ingredient catalog: ordered, read-only, with case-insensitive lookup.

Exports
-------
IngredientCatalog
DEFAULT_CATALOG_PATH
get_default_catalog

Notes
-----
`IngredientCatalog.from_file` is the strict loader used by library calls
(`make_recipe_for_effect`, `make_recipe_for_powers` without a catalog):
bad entries and duplicate names raise. The CLI goes through
`interface.persistence.load_catalog` instead, which logs data issues,
keeps the first of duplicate names and reports a corrupt file as empty.
"""

import difflib
import json
from pathlib import Path
from typing import (
    Iterable,
    Iterator,
)

from models.ingredient import Ingredient

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "ingredients.json"


class IngredientCatalog:
    """Ordered immutable ingredient list with O(1) lookup by name.

    Parameters
    ----------
    ingredients : iterable of Ingredient
        Catalog entries; order is kept and decides score ties.

    Raises
    ------
    ValueError
        If two ingredients share a name (case-insensitive).
    """

    def __init__(
        self,
        ingredients: Iterable[Ingredient],
    ):
        self._ingredients = tuple(ingredients)
        self._by_name: dict[str, Ingredient] = {}
        for ingredient in self._ingredients:
            key = ingredient.name.lower()
            if key in self._by_name:
                raise ValueError(f"Duplicate ingredient: {ingredient.name}")
            self._by_name[key] = ingredient

    def __iter__(
        self,
    ) -> Iterator[Ingredient]:
        return iter(self._ingredients)

    def __len__(
        self,
    ) -> int:
        return len(self._ingredients)

    def __contains__(
        self,
        name: object,
    ) -> bool:
        return isinstance(name, str) and name.lower() in self._by_name

    @property
    def ingredients(
        self,
    ) -> tuple[Ingredient, ...]:
        return self._ingredients

    def get(
        self,
        name: str,
    ) -> Ingredient | None:
        """Ingredient named ``name`` (any case), or ``None``."""
        return self._by_name.get(name.lower())

    @property
    def fillings(
        self,
    ) -> list[Ingredient]:
        return [i for i in self._ingredients if i.is_filling]

    @property
    def condiments(
        self,
    ) -> list[Ingredient]:
        return [i for i in self._ingredients if i.is_condiment]

    @property
    def herba(
        self,
    ) -> list[Ingredient]:
        return [i for i in self._ingredients if i.is_herba]

    def suggest(
        self,
        name: str,
        limit: int = 3,
    ) -> list[str]:
        """Close ingredient names for a misspelled ``name``."""
        matches = difflib.get_close_matches(
            name.lower(), list(self._by_name), n=limit, cutoff=0.6
        )
        return [self._by_name[m].name for m in matches]

    @classmethod
    def from_dicts(
        cls,
        entries: Iterable[dict],
    ) -> "IngredientCatalog":
        return cls(Ingredient.from_dict(entry) for entry in entries)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
    ) -> "IngredientCatalog":
        """Load a catalog from a JSON list of ingredient dicts.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        ValueError
            If the document or an entry is malformed, or two entries
            share a name. See `interface.persistence.load_catalog` for
            the lenient loader.
        """
        with open(path, encoding="utf-8") as in_file:
            data = json.load(in_file)
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON list of ingredients")
        return cls.from_dicts(data)


_default_catalog: IngredientCatalog | None = None


def get_default_catalog() -> IngredientCatalog:
    """Bundled catalog (loaded once)."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = IngredientCatalog.from_file(DEFAULT_CATALOG_PATH)
    return _default_catalog
