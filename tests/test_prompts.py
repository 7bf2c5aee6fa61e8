"""Tests for interactive prompt functions."""

from constants import (
    MealPower,
    PowerType,
)
from interface.prompts import (
    prompt_level,
    prompt_meal_power,
    prompt_power,
    prompt_power_type,
    prompt_yes_no,
)
from models.recipe import Power


def _answers(monkeypatch, *responses):
    replies = iter(responses)
    monkeypatch.setattr("builtins.input", lambda _: next(replies))


class TestPromptEnum:
    """Tests for prompt_meal_power()/prompt_power_type()."""

    def test_by_name(self, monkeypatch) -> None:
        """ "encounter" → ENCOUNTER."""
        _answers(monkeypatch, "encounter")
        assert prompt_meal_power() is MealPower.ENCOUNTER

    def test_by_number(self, monkeypatch) -> None:
        """ "9" → FIRE."""
        _answers(monkeypatch, "9")
        assert prompt_power_type() is PowerType.FIRE

    def test_retries_unknown(self, monkeypatch, capsys) -> None:
        _answers(monkeypatch, "Wood", "42", "grass")
        assert prompt_power_type() is PowerType.GRASS
        assert "Unknown type: 'Wood'" in capsys.readouterr().out


class TestPromptLevel:
    """Tests for prompt_level()."""

    def test_valid_input(self, monkeypatch) -> None:
        _answers(monkeypatch, "3")
        assert prompt_level() == 3

    def test_rejects_out_of_range_and_text(self, monkeypatch, capsys) -> None:
        """ "4", "two", then "2" → 2."""
        _answers(monkeypatch, "4", "two", "2")
        assert prompt_level() == 2
        output = capsys.readouterr().out
        assert "Level must be 1, 2 or 3." in output
        assert "doesn't seem to be a number" in output


class TestPromptPower:
    """Tests for prompt_power()."""

    def test_asks_all_parts(self, monkeypatch) -> None:
        _answers(monkeypatch, "raid", "water", "1")
        assert prompt_power() == Power(MealPower.RAID, PowerType.WATER, 1)

    def test_egg_skips_type(self, monkeypatch) -> None:
        """Egg never asks for a type."""
        _answers(monkeypatch, "egg", "2")
        assert prompt_power() == Power(MealPower.EGG, PowerType.NORMAL, 2)

    def test_only_missing_parts_asked(self, monkeypatch) -> None:
        _answers(monkeypatch, "1")
        power = prompt_power(MealPower.TITLE, PowerType.DRAGON)
        assert power == Power(MealPower.TITLE, PowerType.DRAGON, 1)


class TestPromptYesNo:
    """Tests for prompt_yes_no()."""

    def test_default_on_blank(self, monkeypatch) -> None:
        _answers(monkeypatch, "")
        assert prompt_yes_no("Retry?", default=False) is False

    def test_retries_until_yes_or_no(self, monkeypatch, capsys) -> None:
        _answers(monkeypatch, "maybe", "YES")
        assert prompt_yes_no("Retry?") is True
        assert "Please enter yes or no" in capsys.readouterr().out
