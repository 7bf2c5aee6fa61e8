"""Tests for Power parsing/formatting and the Recipe container."""

import pytest

from constants import (
    MealPower,
    PowerType,
)
from models.recipe import (
    Power,
    Recipe,
    power_from_string,
    power_to_string,
)


class TestPowerStrings:
    """Tests for power_from_string()/power_to_string()."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Encounter:Fire:2", Power(MealPower.ENCOUNTER, PowerType.FIRE, 2)),
            (" title : dragon : 1 ", Power(MealPower.TITLE, PowerType.DRAGON, 1)),
            ("Egg:3", Power(MealPower.EGG, PowerType.NORMAL, 3)),
        ],
    )
    def test_parse(self, text, expected) -> None:
        assert power_from_string(text) == expected

    @pytest.mark.parametrize(
        "text, message",
        [
            ("Encounter:Fire", "Expected MealPower:Type:Level"),
            ("Lunch:Fire:2", "Unknown meal power"),
            ("Encounter:Wood:2", "Unknown type"),
            ("Encounter:Fire:two", "Level must be an integer"),
        ],
    )
    def test_parse_errors(self, text, message) -> None:
        with pytest.raises(ValueError, match=message):
            power_from_string(text)

    def test_format(self) -> None:
        assert power_to_string(Power(MealPower.RAID, PowerType.ICE, 3)) == (
            "Lv 3 Raid Ice"
        )
        assert str(Power(MealPower.EGG, PowerType.FIRE, 1)) == "Lv 1 Egg"

    def test_power_normalizes_ints(self) -> None:
        power = Power(9, 9, "2")
        assert power.meal_power is MealPower.ENCOUNTER
        assert power.type is PowerType.FIRE
        assert power.level == 2


class TestRecipe:
    """Tests for Recipe helpers."""

    def test_counts_and_cost(self, sample_catalog) -> None:
        herba = sample_catalog.get("Herba Mystica")
        chorizo = sample_catalog.get("Chorizo")
        recipe = Recipe(
            fillings=[chorizo, chorizo],
            condiments=[herba, sample_catalog.get("Salt")],
            powers=[],
        )
        assert recipe.herba_count == 1
        assert len(recipe.ingredients) == 4
        assert recipe.piece_counts() == {"Chorizo": 2}
        assert recipe.cost(10, 1) == 22
