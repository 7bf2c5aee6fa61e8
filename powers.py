"""Meal power evaluation: from accumulated vectors to realized powers.

Ranks boosted meal powers and types, derives levels and the type
allocation from the leading type amounts, and pairs them into up to
`MAX_POWERS` realized powers. Also validates power requests.

Exports
-------
MealPowerBoost
TypeBoost
boost_meal_power_vector
rank_meal_power_boosts
rank_type_boosts
calculate_levels
calculate_type_allocation
evaluate_boosts
meal_power_has_type
powers_match
get_target_num_herba
requested_powers_valid
mix_ingredients
get_powers_for_ingredients

Notes
-----
All functions are pure. Vectors are tuples indexed by the enumerations
in `constants`.
"""

from typing import (
    NamedTuple,
    Sequence,
)

from constants import (
    ALLOCATION_SLOTS,
    DIFF70_MARGIN,
    DIFF70_SECOND_FACTOR,
    FLAVOR_BOOST_AMOUNT,
    HERBA_MEAL_POWERS,
    LEVEL_THREE_FIRST_GT,
    LEVEL_TWO_FIRST_GT,
    LEVEL_TWO_FIRST_GTE,
    LEVEL_TWO_OTHERS_GTE,
    MAX_POWERS,
    NUM_FLAVORS,
    NUM_MEAL_POWERS,
    NUM_TYPES,
    SPARKLING_MIN_AMOUNT,
    VALID_LEVELS,
    MealPower,
    PowerType,
    TypeAllocation,
)
from models.ingredient import Ingredient
from models.recipe import Power
from taste import (
    TasteRankCache,
    get_boosted_meal_power,
    rank_flavor_boosts,
)
from vector_math import (
    add,
    zeros,
)


class MealPowerBoost(NamedTuple):
    meal_power: MealPower
    amount: float


class TypeBoost(NamedTuple):
    type: PowerType
    amount: float


def boost_meal_power_vector(
    meal_power_vector: Sequence[float],
    boosted: MealPower | None,
) -> tuple[float, ...]:
    """Add the flavor bonus to the boosted meal power (if any)."""
    if boosted is None:
        return tuple(meal_power_vector)
    return tuple(
        amount + FLAVOR_BOOST_AMOUNT if index == boosted else amount
        for index, amount in enumerate(meal_power_vector)
    )


def rank_meal_power_boosts(
    meal_power_vector: Sequence[float],
    boosted: MealPower | None = None,
) -> list[MealPowerBoost]:
    """Rank the meal powers a sandwich would show.

    Parameters
    ----------
    meal_power_vector : sequence of float
        Unboosted meal power amounts.
    boosted : MealPower or None, optional
        Meal power picked by taste; receives `FLAVOR_BOOST_AMOUNT`.

    Returns
    -------
    list[MealPowerBoost]
        Positive meal powers, amount descending, ties in `MealPower`
        order. Sparkling is dropped below `SPARKLING_MIN_AMOUNT`.
    """
    vector = boost_meal_power_vector(meal_power_vector, boosted)
    boosts = [
        MealPowerBoost(meal_power, vector[meal_power])
        for meal_power in MealPower
        if vector[meal_power] > 0
        and (
            meal_power is not MealPower.SPARKLING
            or vector[meal_power] >= SPARKLING_MIN_AMOUNT
        )
    ]
    boosts.sort(key=lambda boost: (-boost.amount, boost.meal_power))
    return boosts


def rank_type_boosts(
    type_vector: Sequence[float],
) -> list[TypeBoost]:
    """All 18 types, amount descending, ties in `PowerType` order."""
    return [
        TypeBoost(power_type, type_vector[power_type])
        for power_type in sorted(PowerType, key=lambda t: (-type_vector[t], t))
    ]


def calculate_levels(
    ranked_types: Sequence[TypeBoost],
) -> tuple[int, int, int]:
    """Levels of the first, second and third power.

    Parameters
    ----------
    ranked_types : sequence of TypeBoost
        Output of `rank_type_boosts` (at least three entries).

    Returns
    -------
    tuple[int, int, int]
        Level per power place, each in ``{1, 2, 3}``.
    """
    first = ranked_types[0].amount
    second = ranked_types[1].amount
    third = ranked_types[2].amount

    if first > LEVEL_THREE_FIRST_GT:
        return (3, 3, 3)
    if first > LEVEL_TWO_FIRST_GT:
        return (2, 2, 2 if third >= LEVEL_TWO_OTHERS_GTE else 1)
    if first >= LEVEL_TWO_FIRST_GTE:
        if second >= LEVEL_TWO_OTHERS_GTE and third >= LEVEL_TWO_OTHERS_GTE:
            return (2, 2, 1)
        return (2, 1, 1)
    return (1, 1, 1)


def calculate_type_allocation(
    ranked_types: Sequence[TypeBoost],
) -> TypeAllocation:
    """Which ranked type each power place receives."""
    first = ranked_types[0].amount
    second = ranked_types[1].amount

    if first > LEVEL_THREE_FIRST_GT:
        return TypeAllocation.ONE_ONE_ONE
    if first > LEVEL_TWO_FIRST_GT:
        return TypeAllocation.ONE_ONE_THREE
    if first - DIFF70_SECOND_FACTOR * second >= DIFF70_MARGIN:
        return TypeAllocation.ONE_THREE_ONE
    return TypeAllocation.ONE_THREE_TWO


def evaluate_boosts(
    meal_power_vector: Sequence[float],
    boosted: MealPower | None,
    type_vector: Sequence[float],
) -> list[Power]:
    """Realized powers for accumulated vectors.

    Parameters
    ----------
    meal_power_vector : sequence of float
        Unboosted meal power amounts.
    boosted : MealPower or None
        Meal power picked by taste.
    type_vector : sequence of float
        Type amounts.

    Returns
    -------
    list[Power]
        Up to `MAX_POWERS` powers in ranked order. The i-th ranked meal
        power takes the type at allocation slot i and level i.
    """
    ranked_meal_powers = rank_meal_power_boosts(meal_power_vector, boosted)
    ranked_types = rank_type_boosts(type_vector)
    levels = calculate_levels(ranked_types)
    slots = ALLOCATION_SLOTS[calculate_type_allocation(ranked_types)]

    return [
        Power(
            meal_power=boost.meal_power,
            type=ranked_types[slots[place] - 1].type,
            level=levels[place],
        )
        for place, boost in enumerate(ranked_meal_powers[:MAX_POWERS])
    ]


def meal_power_has_type(
    meal_power: MealPower,
) -> bool:
    return meal_power is not MealPower.EGG


def powers_match(
    actual: Power,
    requested: Power,
) -> bool:
    """True if ``actual`` satisfies ``requested`` (level is a minimum)."""
    if actual.meal_power != requested.meal_power:
        return False
    if meal_power_has_type(requested.meal_power) and actual.type != requested.type:
        return False
    return actual.level >= requested.level


def get_target_num_herba(
    powers: Sequence[Power],
) -> int:
    """Herba mystica a request needs: 2 for Sparkling, 1 for Title or Lv 3."""
    if any(p.meal_power is MealPower.SPARKLING for p in powers):
        return 2
    if any(p.meal_power is MealPower.TITLE or p.level == 3 for p in powers):
        return 1
    return 0


def requested_powers_valid(
    powers: Sequence[Power],
) -> bool:
    """Check that a power request can be realized at all.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers.

    Returns
    -------
    bool
        ``False`` for an empty or oversized request, a level outside
        ``{1, 2, 3}``, repeated meal powers, more requests than the
        places left after herba mystica powers, or (with Sparkling or a
        level 3 request) typed powers that disagree on the type.
    """
    if not powers or len(powers) > MAX_POWERS:
        return False
    if any(p.level not in VALID_LEVELS for p in powers):
        return False

    meal_powers = [p.meal_power for p in powers]
    if len(set(meal_powers)) != len(meal_powers):
        return False

    num_herba = get_target_num_herba(powers)
    leading = 2 if num_herba >= 2 else num_herba
    non_herba = [p for p in powers if p.meal_power not in HERBA_MEAL_POWERS]
    if len(non_herba) > MAX_POWERS - leading:
        return False

    # Every place shares the first type once it passes the level 3 band
    if num_herba >= 2 or any(p.level == 3 for p in powers):
        types = {p.type for p in powers if meal_power_has_type(p.meal_power)}
        if len(types) > 1:
            return False
    return True


def mix_ingredients(
    ingredients: Sequence[Ingredient],
) -> tuple[tuple[float, ...], tuple[float, ...], tuple[float, ...]]:
    """Summed (meal power, type, flavor) vectors of ``ingredients``."""
    meal_power_vector = zeros(NUM_MEAL_POWERS)
    type_vector = zeros(NUM_TYPES)
    flavor_vector = zeros(NUM_FLAVORS)
    for ingredient in ingredients:
        meal_power_vector = add(meal_power_vector, ingredient.meal_power_vector)
        type_vector = add(type_vector, ingredient.type_vector)
        flavor_vector = add(flavor_vector, ingredient.flavor_vector)
    return meal_power_vector, type_vector, flavor_vector


def get_powers_for_ingredients(
    ingredients: Sequence[Ingredient],
    cache: TasteRankCache | None = None,
) -> list[Power]:
    """Realized powers of an ingredient list."""
    meal_power_vector, type_vector, flavor_vector = mix_ingredients(ingredients)
    ranking = (
        cache.rank(flavor_vector)
        if cache is not None
        else rank_flavor_boosts(flavor_vector)
    )
    boosted = get_boosted_meal_power(ranking)
    return evaluate_boosts(meal_power_vector, boosted, type_vector)
