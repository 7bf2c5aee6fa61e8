"""Target vectors: what the accumulated vectors must reach.

Given a placement config set, computes the type, level and meal power
vectors that would put each requested power in its place. Targets are
only ever raised from the current vector, never lowered, and only the
components a placement depends on are touched.

Exports
-------
get_target_type_vector
get_target_level_vector
get_target_meal_power_vector
"""

import math
from typing import (
    Sequence,
)

from constants import (
    DIFF70_MARGIN,
    DIFF70_SECOND_FACTOR,
    SPARKLING_MIN_AMOUNT,
    MealPower,
    PowerType,
)
from models.recipe import Power
from placement import (
    TargetConfig,
    herba_slots,
    sort_target_powers_by_mp_place,
)
from powers import (
    MealPowerBoost,
    meal_power_has_type,
)


def _beating_amount(
    candidate: int,
    rivals: Sequence[int],
    vector: Sequence[float],
) -> float:
    """Smallest amount at which ``candidate`` outranks every rival.

    Ties go to the lower enumeration index.
    """
    required = 0
    for rival in rivals:
        amount = vector[rival] if candidate < rival else vector[rival] + 1
        required = max(required, amount)
    return required


def get_target_type_vector(
    powers: Sequence[Power],
    config_set: Sequence[TargetConfig],
    target_type_indices: Sequence[PowerType],
    type_vector: Sequence[float],
    force_diff: bool = False,
) -> tuple[float, ...]:
    """Type amounts that rank ``target_type_indices`` first to third.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers, aligned with ``config_set``.
    config_set : sequence of TargetConfig
        Chosen placement per power.
    target_type_indices : sequence of PowerType
        Type wanted at ranks 1, 2 and 3.
    type_vector : sequence of float
        Current type amounts.
    force_diff : bool, optional
        Add one to every requested type so the delta is never zero.

    Returns
    -------
    tuple[float, ...]
        Target type vector, component-wise ``>= type_vector``.
    """
    target = list(type_vector)

    # Third place first so earlier places can account for the raise
    for place in reversed(range(len(target_type_indices))):
        power_type = target_type_indices[place]
        ahead = set(target_type_indices[: place + 1])
        rivals = [t for t in PowerType if t not in ahead]
        target[power_type] = max(
            target[power_type],
            _beating_amount(power_type, rivals, target),
        )

    if force_diff:
        for power, _config in zip(powers, config_set):
            if meal_power_has_type(power.meal_power):
                target[power.type] += 1
    return tuple(target)


def get_target_level_vector(
    powers: Sequence[Power],
    config_set: Sequence[TargetConfig],
    target_types: Sequence[PowerType],
    type_vector: Sequence[float],
) -> tuple[float, ...]:
    """Type amounts that satisfy the level thresholds of ``config_set``.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers (unused beyond alignment with ``config_set``).
    config_set : sequence of TargetConfig
        Chosen placement per power.
    target_types : sequence of PowerType
        Type wanted at ranks 1, 2 and 3.
    type_vector : sequence of float
        Current type amounts.

    Returns
    -------
    tuple[float, ...]
        Target vector; the first type is raised to the largest lower
        bound, the second and third to ``third_type_gte``.
    """
    target = list(type_vector)

    first_gte = 0
    third_gte = 0
    for config in config_set:
        if config.first_type_gt is not None:
            first_gte = max(first_gte, config.first_type_gt + 1)
        if config.first_type_gte is not None:
            first_gte = max(first_gte, config.first_type_gte)
        if config.third_type_gte is not None:
            first_gte = max(first_gte, config.third_type_gte)
            third_gte = max(third_gte, config.third_type_gte)

    first_type = target_types[0]
    if third_gte:
        for power_type in target_types[1:3]:
            target[power_type] = max(target[power_type], third_gte)
    target[first_type] = max(target[first_type], first_gte)

    if any(config.diff70 for config in config_set):
        second_amount = target[target_types[1]]
        target[first_type] = max(
            target[first_type],
            math.ceil(DIFF70_SECOND_FACTOR * second_amount + DIFF70_MARGIN),
        )
    return tuple(target)


def get_target_meal_power_vector(
    powers: Sequence[Power],
    config_set: Sequence[TargetConfig],
    ranked_meal_power_boosts: Sequence[MealPowerBoost],
    meal_power_vector: Sequence[float],
) -> tuple[float, ...]:
    """Boosted meal power amounts that put each power in its place.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers, aligned with ``config_set``.
    config_set : sequence of TargetConfig
        Chosen placement per power.
    ranked_meal_power_boosts : sequence of MealPowerBoost
        Current ranking (boost applied).
    meal_power_vector : sequence of float
        Current boosted meal power amounts.

    Returns
    -------
    tuple[float, ...]
        Target vector. Only requested meal powers are raised: each must
        outrank every power that has to sit behind it, reach ``1`` (or
        `SPARKLING_MIN_AMOUNT` for Sparkling), and never drops below
        its current amount.
    """
    target = list(meal_power_vector)
    requested = {power.meal_power for power in powers}
    placed = {
        power.meal_power: config.mp_place_index
        for power, config in zip(powers, config_set)
    }

    for power, config in sort_target_powers_by_mp_place(powers, config_set):
        meal_power = power.meal_power
        place = config.mp_place_index

        above = list(herba_slots(config.num_herba)[:place])
        above += [
            mp for mp, mp_place in placed.items() if mp_place < place and mp not in above
        ]
        open_places = max(place - len(above), 0)
        fillers = [
            boost.meal_power
            for boost in ranked_meal_power_boosts
            if boost.meal_power not in requested and boost.meal_power not in above
        ][:open_places]

        exempt = set(above) | set(fillers) | {meal_power}
        rivals = [
            mp
            for mp in MealPower
            if mp not in exempt
            and (mp is not MealPower.SPARKLING or target[mp] >= SPARKLING_MIN_AMOUNT)
        ]
        floor = SPARKLING_MIN_AMOUNT if meal_power is MealPower.SPARKLING else 1
        target[meal_power] = max(
            target[meal_power],
            _beating_amount(meal_power, rivals, target),
            floor,
        )
    return tuple(target)
