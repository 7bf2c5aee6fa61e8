"""Game constants for sandwich search (enumerations and immutable tables).

Conventions
-----------
- Every vector is indexed positionally by one of the enumerations below:
  meal power vectors by `MealPower` (10), type vectors by `PowerType` (18),
  flavor vectors by `Flavor` (5).
- Ties in any ranking are broken by enumeration order.

Notes
-----
Tables are exposed as read-only mappings (via `MappingProxyType`).
Tunable search knobs live in `config.py`; values here are game rules.
"""

from enum import (
    Enum,
    IntEnum,
)
# Read-only mapping wrapper + explicit "constant" typing
from types import (
    MappingProxyType,
)
from typing import (
    Final,
    Mapping,
)


class MealPower(IntEnum):
    EGG = 0
    CATCH = 1
    EXP = 2
    ITEM = 3
    RAID = 4
    SPARKLING = 5
    TITLE = 6
    HUMUNGO = 7
    TEENSY = 8
    ENCOUNTER = 9


class PowerType(IntEnum):
    NORMAL = 0
    FIGHTING = 1
    FLYING = 2
    POISON = 3
    GROUND = 4
    ROCK = 5
    BUG = 6
    GHOST = 7
    STEEL = 8
    FIRE = 9
    WATER = 10
    GRASS = 11
    ELECTRIC = 12
    PSYCHIC = 13
    ICE = 14
    DRAGON = 15
    DARK = 16
    FAIRY = 17


class Flavor(IntEnum):
    SWEET = 0
    SALTY = 1
    SOUR = 2
    BITTER = 3
    HOT = 4


class IngredientRole(str, Enum):
    FILLING = "filling"
    CONDIMENT = "condiment"


class TypeAllocation(str, Enum):
    """Which ranked type (1st/2nd/3rd) each power slot receives."""

    ONE_ONE_ONE = "ONE_ONE_ONE"
    ONE_ONE_THREE = "ONE_ONE_THREE"
    ONE_THREE_ONE = "ONE_THREE_ONE"
    ONE_THREE_TWO = "ONE_THREE_TWO"


NUM_MEAL_POWERS: Final[int] = len(MealPower)
NUM_TYPES: Final[int] = len(PowerType)
NUM_FLAVORS: Final[int] = len(Flavor)

# --- Taste -------------------------------------------------------------------

# (first flavor, second flavor) -> boosted meal power
_TASTE_MAP_DICT: Final[dict[Flavor, dict[Flavor, MealPower]]] = {
    Flavor.SWEET: {
        Flavor.SWEET: MealPower.EGG,
        Flavor.SALTY: MealPower.EGG,
        Flavor.SOUR: MealPower.CATCH,
        Flavor.BITTER: MealPower.EGG,
        Flavor.HOT: MealPower.RAID,
    },
    Flavor.SALTY: {
        Flavor.SALTY: MealPower.ENCOUNTER,
        Flavor.SWEET: MealPower.ENCOUNTER,
        Flavor.SOUR: MealPower.ENCOUNTER,
        Flavor.BITTER: MealPower.EXP,
        Flavor.HOT: MealPower.ENCOUNTER,
    },
    Flavor.SOUR: {
        Flavor.SOUR: MealPower.TEENSY,
        Flavor.SWEET: MealPower.CATCH,
        Flavor.SALTY: MealPower.TEENSY,
        Flavor.BITTER: MealPower.TEENSY,
        Flavor.HOT: MealPower.TEENSY,
    },
    Flavor.BITTER: {
        Flavor.BITTER: MealPower.ITEM,
        Flavor.SWEET: MealPower.ITEM,
        Flavor.SALTY: MealPower.EXP,
        Flavor.SOUR: MealPower.ITEM,
        Flavor.HOT: MealPower.ITEM,
    },
    Flavor.HOT: {
        Flavor.HOT: MealPower.HUMUNGO,
        Flavor.SWEET: MealPower.RAID,
        Flavor.SALTY: MealPower.HUMUNGO,
        Flavor.SOUR: MealPower.HUMUNGO,
        Flavor.BITTER: MealPower.HUMUNGO,
    },
}

# With more than one entry, the primaries are a subset of the secondaries
_PRIMARY_FLAVORS_DICT: Final[dict[MealPower, tuple[Flavor, ...]]] = {
    MealPower.EGG: (Flavor.SWEET,),
    MealPower.CATCH: (Flavor.SWEET, Flavor.SOUR),
    MealPower.EXP: (Flavor.BITTER, Flavor.SALTY),
    MealPower.ITEM: (Flavor.BITTER,),
    MealPower.RAID: (Flavor.SWEET, Flavor.HOT),
    MealPower.SPARKLING: (),
    MealPower.TITLE: (),
    MealPower.HUMUNGO: (Flavor.HOT,),
    MealPower.TEENSY: (Flavor.SOUR,),
    MealPower.ENCOUNTER: (Flavor.SALTY,),
}

_SECONDARY_FLAVORS_DICT: Final[dict[MealPower, tuple[Flavor, ...]]] = {
    MealPower.EGG: (Flavor.SALTY, Flavor.BITTER),
    MealPower.CATCH: (Flavor.SOUR, Flavor.SWEET),
    MealPower.EXP: (Flavor.SALTY, Flavor.BITTER),
    MealPower.ITEM: (Flavor.HOT, Flavor.SOUR, Flavor.SWEET),
    MealPower.RAID: (Flavor.HOT, Flavor.SWEET),
    MealPower.SPARKLING: (),
    MealPower.TITLE: (),
    MealPower.HUMUNGO: (Flavor.SALTY, Flavor.BITTER, Flavor.SOUR),
    MealPower.TEENSY: (Flavor.SALTY, Flavor.BITTER, Flavor.HOT),
    MealPower.ENCOUNTER: (Flavor.SWEET, Flavor.HOT, Flavor.SOUR),
}

TASTE_MAP: Final[Mapping[Flavor, Mapping[Flavor, MealPower]]] = MappingProxyType(
    {first: MappingProxyType(row) for first, row in _TASTE_MAP_DICT.items()}
)
PRIMARY_FLAVORS: Final[Mapping[MealPower, tuple[Flavor, ...]]] = MappingProxyType(
    _PRIMARY_FLAVORS_DICT
)
SECONDARY_FLAVORS: Final[Mapping[MealPower, tuple[Flavor, ...]]] = (
    MappingProxyType(_SECONDARY_FLAVORS_DICT)
)

# Added to the boosted meal power before ranking
FLAVOR_BOOST_AMOUNT: Final[int] = 100

# --- Powers ------------------------------------------------------------------

# Herba mystica powers; they occupy the leading meal power places
HERBA_MEAL_POWERS: Final[frozenset[MealPower]] = frozenset(
    {MealPower.SPARKLING, MealPower.TITLE}
)

# Sparkling is only realized at or above this amount (two herba)
SPARKLING_MIN_AMOUNT: Final[int] = 2000

# A sandwich realizes at most this many powers
MAX_POWERS: Final[int] = 3

VALID_LEVELS: Final[frozenset[int]] = frozenset({1, 2, 3})

# Level bands on the first (and second/third) type amounts
LEVEL_THREE_FIRST_GT: Final[int] = 480
LEVEL_TWO_FIRST_GT: Final[int] = 280
LEVEL_TWO_FIRST_GTE: Final[int] = 180
LEVEL_TWO_OTHERS_GTE: Final[int] = 180

# ONE_THREE_ONE when first - DIFF70_SECOND_FACTOR * second >= DIFF70_MARGIN
DIFF70_SECOND_FACTOR: Final[float] = 1.5
DIFF70_MARGIN: Final[int] = 70

# 1-based ranked type per power slot
_ALLOCATION_SLOTS_DICT: Final[dict[TypeAllocation, tuple[int, int, int]]] = {
    TypeAllocation.ONE_ONE_ONE: (1, 1, 1),
    TypeAllocation.ONE_ONE_THREE: (1, 1, 3),
    TypeAllocation.ONE_THREE_ONE: (1, 3, 1),
    TypeAllocation.ONE_THREE_TWO: (1, 3, 2),
}
ALLOCATION_SLOTS: Final[Mapping[TypeAllocation, tuple[int, int, int]]] = (
    MappingProxyType(_ALLOCATION_SLOTS_DICT)
)

# --- Capacity ----------------------------------------------------------------

MAX_FILLINGS: Final[int] = 6
MAX_CONDIMENTS: Final[int] = 4
# Pieces of a single named filling
MAX_PIECES: Final[int] = 12

# --- Scoring -----------------------------------------------------------------

# Keep candidates scoring >= best - threshold * |best|
CANDIDATE_SCORE_THRESHOLD: Final[float] = 0.2
MAX_CANDIDATES: Final[int] = 3
# Multiplicative bonus for plain (non-herba) condiments
CONDIMENT_BONUS: Final[float] = 0.4

# Progress each remaining slot can be expected to contribute
MP_FILLING: Final[int] = 21
MP_CONDIMENT: Final[int] = 21
TYPE_FILLING: Final[int] = 36
TYPE_CONDIMENT: Final[int] = 4

# Floor for the meal power base delta in the MP weight
MP_BASE_DELTA_FLOOR: Final[float] = 100.0

# Fewer fillings dominate fewer condiments when comparing finished branches
FILLING_COST: Final[int] = 10
CONDIMENT_COST: Final[int] = 1
