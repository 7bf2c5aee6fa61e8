from dataclasses import (
    dataclass,
    field,
)

from constants import (
    MealPower,
    PowerType,
)
from models.ingredient import Ingredient


@dataclass(frozen=True)
class Power:
    """One (meal power, type, level) triple, requested or realized.

    Attributes
    ----------
    meal_power : MealPower
        Effect kind.
    type : PowerType
        Effect type. Ignored for meal powers without a type (Egg).
    level : int
        Level in ``{1, 2, 3}``.
    """

    meal_power: MealPower
    type: PowerType
    level: int

    def __post_init__(
        self,
    ) -> None:
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "meal_power", MealPower(self.meal_power))
        object.__setattr__(self, "type", PowerType(self.type))
        object.__setattr__(self, "level", int(self.level))

    def __str__(
        self,
    ) -> str:
        return power_to_string(self)


def power_to_string(
    power: Power,
) -> str:
    """Human label like ``"Lv 2 Encounter Fire"``."""
    label = f"Lv {power.level} {power.meal_power.name.title()}"
    if power.meal_power is not MealPower.EGG:
        label += f" {power.type.name.title()}"
    return label


def power_from_string(
    text: str,
) -> Power:
    """Parse ``"Encounter:Fire:2"`` (or ``"Egg:2"``) into a `Power`.

    Names are case-insensitive; spaces may stand in for underscores.

    Raises
    ------
    ValueError
        If the text does not name a meal power, type and integer level.
    """
    parts = [part.strip() for part in text.split(":")]
    if len(parts) == 2 and parts[0].upper() == MealPower.EGG.name:
        parts = [parts[0], PowerType.NORMAL.name, parts[1]]
    if len(parts) != 3:
        raise ValueError(f"Expected MealPower:Type:Level, got {text!r}")

    meal_power_name, type_name, level_text = parts
    try:
        meal_power = MealPower[meal_power_name.upper().replace(" ", "_")]
    except KeyError:
        raise ValueError(f"Unknown meal power: {meal_power_name!r}") from None
    try:
        power_type = PowerType[type_name.upper()] if type_name else PowerType.NORMAL
    except KeyError:
        raise ValueError(f"Unknown type: {type_name!r}") from None
    try:
        level = int(level_text)
    except ValueError:
        raise ValueError(f"Level must be an integer: {level_text!r}") from None
    return Power(meal_power, power_type, level)


@dataclass
class Recipe:
    """A finished ingredient combination and what it produces.

    Attributes
    ----------
    fillings : list[Ingredient]
        Fillings in the order they were added.
    condiments : list[Ingredient]
        Condiments in the order they were added.
    powers : list[Power]
        Realized powers, ranked.
    meal_power_vector : tuple[int, ...]
        Accumulated (unboosted) meal power amounts.
    type_vector : tuple[int, ...]
        Accumulated type amounts.
    flavor_vector : tuple[int, ...]
        Accumulated flavor amounts.
    """

    fillings: list[Ingredient]
    condiments: list[Ingredient]
    powers: list[Power]
    meal_power_vector: tuple[int, ...] = field(default=())
    type_vector: tuple[int, ...] = field(default=())
    flavor_vector: tuple[int, ...] = field(default=())

    @property
    def ingredients(
        self,
    ) -> list[Ingredient]:
        return self.fillings + self.condiments

    @property
    def herba_count(
        self,
    ) -> int:
        return sum(1 for condiment in self.condiments if condiment.is_herba)

    def piece_counts(
        self,
    ) -> dict[str, int]:
        """Total pieces per filling name."""
        counts: dict[str, int] = {}
        for filling in self.fillings:
            counts[filling.name] = counts.get(filling.name, 0) + filling.pieces
        return counts

    def cost(
        self,
        filling_cost: int,
        condiment_cost: int,
    ) -> int:
        """Weighted size used to compare finished recipes."""
        return filling_cost * len(self.fillings) + condiment_cost * len(
            self.condiments
        )
