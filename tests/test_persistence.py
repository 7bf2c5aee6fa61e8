"""Tests for catalog JSON persistence and integrity logging."""

import json
import logging

import pytest

from conftest import (
    make_herba,
    make_ingredient,
)
from constants import (
    MealPower,
    PowerType,
)
from interface.persistence import (
    load_catalog,
    log_catalog_issues,
    read_ingredient_catalog,
    save_ingredient_catalog,
)


class TestReadIngredientCatalog:
    """Tests for read_ingredient_catalog()."""

    def test_round_trip(self, tmp_path, sample_catalog) -> None:
        """save then read returns the same names and vectors."""
        path = tmp_path / "ingredients.json"
        save_ingredient_catalog([i.to_dict() for i in sample_catalog], path)
        loaded = read_ingredient_catalog(path)
        assert [i.name for i in loaded] == [i.name for i in sample_catalog]
        assert loaded[1].type_vector == sample_catalog.get("Chorizo").type_vector

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            read_ingredient_catalog(tmp_path / "missing.json")

    def test_corrupt_json_returns_empty(self, tmp_path, caplog) -> None:
        path = tmp_path / "corrupt.json"
        path.write_text("[{not json", encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            assert read_ingredient_catalog(path) == []
        assert "Failed to read ingredient data" in caplog.text

    def test_bad_entry_returns_empty(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"Role": "filling"}]), encoding="utf-8")
        assert read_ingredient_catalog(path) == []


class TestSaveIngredientCatalog:
    """Tests for save_ingredient_catalog()."""

    def test_last_duplicate_wins(self, tmp_path) -> None:
        path = tmp_path / "out.json"
        save_ingredient_catalog(
            [
                {"Name": "Rice", "Role": "filling", "Pieces": 1},
                {"Name": "RICE", "Role": "filling", "Pieces": 2},
            ],
            path,
        )
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [{"Name": "RICE", "Role": "filling", "Pieces": 2}]


class TestLogCatalogIssues:
    """Tests for log_catalog_issues()."""

    def test_clean_catalog(self, sample_catalog, caplog) -> None:
        with caplog.at_level(logging.INFO):
            assert log_catalog_issues(list(sample_catalog)) == []
        assert "No catalog issues" in caplog.text

    def test_duplicate_names(self, caplog) -> None:
        issues = log_catalog_issues(
            [
                make_ingredient("Rice", types={PowerType.NORMAL: 36}),
                make_ingredient("rice", types={PowerType.NORMAL: 36}),
            ]
        )
        assert issues == ["Duplicate ingredient name: rice"]
        assert "Duplicate ingredient name" in caplog.text

    def test_herba_without_herba_powers(self) -> None:
        broken = make_ingredient(
            "Fake Herba",
            "condiment",
            meal_powers={MealPower.EGG: 5},
            is_herba=True,
        )
        issues = log_catalog_issues([broken])
        assert issues == ["Herba mystica without Sparkling/Title: Fake Herba"]

    def test_empty_and_typeless(self) -> None:
        issues = log_catalog_issues(
            [
                make_ingredient("Air"),
                make_ingredient("Bread", meal_powers={MealPower.EGG: 1}),
                make_herba(),
            ]
        )
        assert issues == [
            "Ingredient contributes nothing: Air",
            "Filling without types: Bread",
        ]


class TestLoadCatalog:
    """Tests for load_catalog()."""

    def test_first_duplicate_kept(self, tmp_path) -> None:
        path = tmp_path / "dupes.json"
        path.write_text(
            json.dumps(
                [
                    {"Name": "Rice", "Role": "filling", "Types": {"Normal": 36}},
                    {"Name": "rice", "Role": "filling", "Types": {"Water": 1}},
                    {"Name": "Salt", "Role": "condiment", "Flavors": {"Salty": 20}},
                ]
            ),
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert len(catalog) == 2
        assert catalog.get("rice").type_vector[PowerType.NORMAL] == 36

    def test_default_path(self) -> None:
        assert len(load_catalog()) > 0
