"""Interactive prompts used by the CLI.

Order enforced by `prompt_power`:
1) Meal power → 2) Type (skipped for Egg) → 3) Level.
"""

from constants import (
    VALID_LEVELS,
    MealPower,
    PowerType,
)
from models.recipe import Power
from powers import meal_power_has_type


def _prompt_enum(
    label,
    enum_cls,
):
    """Loop until the user names (or numbers) a member of ``enum_cls``."""
    names = ", ".join(member.name.title() for member in enum_cls)
    print(f"{label} options: {names}")
    while True:
        value = input(f"{label}? > ").strip()
        if value.isdigit() and int(value) in {m.value for m in enum_cls}:
            return enum_cls(int(value))
        try:
            return enum_cls[value.upper().replace(" ", "_")]
        except KeyError:
            print(f"Unknown {label.lower()}: {value!r}")


def prompt_meal_power() -> MealPower:
    """Ask for the meal power (name or number)."""
    return _prompt_enum("Meal power", MealPower)


def prompt_power_type() -> PowerType:
    """Ask for the type (name or number)."""
    return _prompt_enum("Type", PowerType)


def prompt_level() -> int:
    """Ask for the level (1-3)."""
    while True:
        try:
            value = int(input("Level (1-3)? > ").strip())
            if value in VALID_LEVELS:
                return value
            print("Level must be 1, 2 or 3.")
        except ValueError:
            print("That doesn't seem to be a number.")


def prompt_power(
    meal_power: MealPower | None = None,
    power_type: PowerType | None = None,
    level: int | None = None,
) -> Power:
    """Collect the missing parts of a power interactively.

    Parameters
    ----------
    meal_power, power_type, level : optional
        Parts already known; only the missing ones are asked for.

    Returns
    -------
    Power
        Complete power. Egg powers get ``PowerType.NORMAL`` without
        asking, since their type is ignored.
    """
    if meal_power is None:
        meal_power = prompt_meal_power()
    if power_type is None:
        power_type = (
            prompt_power_type()
            if meal_power_has_type(meal_power)
            else PowerType.NORMAL
        )
    if level is None:
        level = prompt_level()
    return Power(meal_power, power_type, level)


def prompt_yes_no(
    prompt: str,
    default: bool = True,
) -> bool:
    """Prompt the user for a yes/no response.

    Parameters
    ----------
    prompt : str
        The question to display.
    default : bool, optional
        Default value if the user presses Enter, by default ``True``.

    Returns
    -------
    bool
        ``True`` for yes, ``False`` for no.
    """

    suffix = " (Y/n) > " if default else " (y/N) > "
    while True:
        # Blank means "take the default"
        resp = input(prompt + suffix).strip().lower()
        if resp == "":
            return default
        if resp in ("y", "yes"):
            return True
        if resp in ("n", "no"):
            return False
        print("Please enter yes or no (y/n).")
