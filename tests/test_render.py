"""Tests for recipe and catalog display rendering."""

from constants import (
    MealPower,
    PowerType,
)
from interface.render import (
    display_catalog,
    display_powers,
    display_recipe,
)
from models.recipe import (
    Power,
    Recipe,
)


def _recipe(catalog, fillings, condiments, powers, **vectors):
    return Recipe(
        fillings=[catalog.get(name) for name in fillings],
        condiments=[catalog.get(name) for name in condiments],
        powers=powers,
        **vectors,
    )


class TestDisplayRecipe:
    """Tests for display_recipe()."""

    def test_no_recipe(self, capsys) -> None:
        """Prints 'No recipe found.' for None."""
        display_recipe(None)
        assert "No recipe found." in capsys.readouterr().out

    def test_banner_and_groups(self, capsys, sample_catalog) -> None:
        """Repeated ingredients are grouped as '2x'."""
        recipe = _recipe(
            sample_catalog,
            ["Ground Meat"],
            ["Herba Mystica", "Herba Mystica"],
            [Power(MealPower.SPARKLING, PowerType.GROUND, 3)],
        )
        display_recipe(recipe, title="SPARKLING")
        output = capsys.readouterr().out
        assert "========== SPARKLING ==========" in output
        assert "Fillings:   Ground Meat" in output
        assert "Condiments: 2x Herba Mystica" in output
        assert "Herba mystica: 2" in output
        assert "1. Lv 3 Sparkling Ground" in output

    def test_no_herba_line_without_herba(self, capsys, sample_catalog) -> None:
        recipe = _recipe(
            sample_catalog,
            ["Chorizo"],
            ["Salt"],
            [Power(MealPower.ENCOUNTER, PowerType.FIRE, 2)],
        )
        display_recipe(recipe)
        output = capsys.readouterr().out
        assert "Herba mystica" not in output
        assert "Lv 2 Encounter Fire" in output

    def test_notices(self, capsys) -> None:
        """Prints 'Note: ...' lines even without a recipe."""
        display_recipe(None, notices=["Search stopped after 5 steps."])
        output = capsys.readouterr().out
        assert "Note: Search stopped after 5 steps." in output
        assert "No recipe found." in output

    def test_vectors_shown_on_request(self, capsys, sample_catalog) -> None:
        recipe = _recipe(
            sample_catalog,
            ["Chorizo"],
            ["Salt"],
            [],
            meal_power_vector=(37,) + (0,) * 9,
            type_vector=(2,) + (0,) * 8 + (190,) + (0,) * 8,
            flavor_vector=(0, 40, 0, 0, 10),
        )
        display_recipe(recipe, show_vectors=True)
        output = capsys.readouterr().out
        assert "Meal powers: Egg 37" in output
        assert "Normal 2" in output
        assert "Fire 190" in output
        assert "(no powers)" in output

    def test_vectors_hidden_by_default(self, capsys, sample_catalog) -> None:
        recipe = _recipe(
            sample_catalog,
            ["Chorizo"],
            ["Salt"],
            [],
            meal_power_vector=(37,) + (0,) * 9,
        )
        display_recipe(recipe)
        assert "Meal powers:" not in capsys.readouterr().out


class TestDisplayPowers:
    """Tests for display_powers()."""

    def test_ranked_lines(self, capsys) -> None:
        display_powers(
            [
                Power(MealPower.TITLE, PowerType.NORMAL, 2),
                Power(MealPower.EGG, PowerType.NORMAL, 2),
            ]
        )
        output = capsys.readouterr().out
        assert "1. Lv 2 Title Normal" in output
        # Egg has no type
        assert "2. Lv 2 Egg\n" in output


class TestDisplayCatalog:
    """Tests for display_catalog()."""

    def test_all_rows(self, capsys, sample_catalog) -> None:
        display_catalog(sample_catalog)
        output = capsys.readouterr().out
        assert "herba" in output
        assert "Fire 190" in output
        assert "5 ingredient(s)" in output

    def test_role_filter(self, capsys, sample_catalog) -> None:
        display_catalog(sample_catalog, role="condiment")
        output = capsys.readouterr().out
        assert "Salt" in output
        assert "Chorizo" not in output
        assert "2 ingredient(s)" in output

    def test_empty(self, capsys) -> None:
        display_catalog([])
        assert "No ingredients." in capsys.readouterr().out
