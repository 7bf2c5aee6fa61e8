"""Placement configurations for requested powers.

Realized powers come out in ranked order, so a requested power has to
land in some meal power place, paired with the type at that place's
allocation slot, at a level the type amounts allow. A `TargetConfig`
names one such placement plus the type thresholds it implies.

Exports
-------
TargetConfig
herba_slots
get_target_configs
permute_power_configs
select_power_at_target_position
get_type_targets_by_place
fill_in
get_type_target_indices
get_meal_power_targets_by_place
sort_target_powers_by_mp_place

Notes
-----
Herba mystica powers (Sparkling, Title) always hold the leading meal
power places; regular powers can only use the places after them.
"""

import itertools
import logging
from dataclasses import (
    dataclass,
)
from typing import (
    Iterable,
    Sequence,
    TypeVar,
)

from constants import (
    ALLOCATION_SLOTS,
    HERBA_MEAL_POWERS,
    LEVEL_THREE_FIRST_GT,
    LEVEL_TWO_FIRST_GT,
    LEVEL_TWO_FIRST_GTE,
    LEVEL_TWO_OTHERS_GTE,
    MAX_POWERS,
    MealPower,
    PowerType,
    TypeAllocation,
)
from models.recipe import Power
from powers import (
    TypeBoost,
    meal_power_has_type,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TargetConfig:
    """Where one requested power must land.

    Attributes
    ----------
    type_allocation : TypeAllocation
        Allocation the type amounts must produce.
    type_place_index : int
        0-based rank of the type the power receives.
    mp_place_index : int
        0-based place of the power among the ranked meal powers.
    num_herba : int
        Herba mystica in the recipe; their powers lead the ranking.
    first_type_gt : int or None
        First type amount must exceed this.
    first_type_gte : int or None
        First type amount must reach this.
    first_type_lte : int or None
        First type amount must not exceed this.
    third_type_gte : int or None
        Second and third type amounts must reach this.
    diff70 : bool
        ``first - 1.5 * second >= 70`` must hold.
    """

    type_allocation: TypeAllocation
    type_place_index: int
    mp_place_index: int
    num_herba: int = 0
    first_type_gt: int | None = None
    first_type_gte: int | None = None
    first_type_lte: int | None = None
    third_type_gte: int | None = None
    diff70: bool = False


def herba_slots(
    num_herba: int,
) -> tuple[MealPower, ...]:
    """Meal powers fixed to the leading places by ``num_herba`` herba."""
    if num_herba >= 2:
        return (MealPower.SPARKLING, MealPower.TITLE)
    if num_herba == 1:
        return (MealPower.TITLE,)
    return ()


def _level_requirements(
    allocation: TypeAllocation,
    mp_place: int,
    level: int,
) -> dict | None:
    """Type thresholds for ``level`` at ``mp_place``; ``None`` if impossible."""
    if allocation is TypeAllocation.ONE_ONE_ONE:
        return {"first_type_gt": LEVEL_THREE_FIRST_GT}

    if level == 3:
        return None

    if allocation is TypeAllocation.ONE_ONE_THREE:
        requirements = {
            "first_type_gt": LEVEL_TWO_FIRST_GT,
            "first_type_lte": LEVEL_THREE_FIRST_GT,
        }
        if level == 2 and mp_place == 2:
            requirements["third_type_gte"] = LEVEL_TWO_OTHERS_GTE
        return requirements

    requirements = {
        "first_type_lte": LEVEL_TWO_FIRST_GT,
        "diff70": allocation is TypeAllocation.ONE_THREE_ONE,
    }
    if level == 2:
        if mp_place == 0:
            requirements["first_type_gte"] = LEVEL_TWO_FIRST_GTE
        elif mp_place == 1:
            requirements["first_type_gte"] = LEVEL_TWO_FIRST_GTE
            requirements["third_type_gte"] = LEVEL_TWO_OTHERS_GTE
        else:
            # Third place never reaches level 2 below the 280 band
            return None
    return requirements


def _allocations_for(
    num_herba: int,
) -> list[TypeAllocation]:
    if num_herba >= 2:
        # Two herba put every type at 500, past the level 3 band
        return [TypeAllocation.ONE_ONE_ONE]
    if num_herba == 1:
        return list(TypeAllocation)
    # Without herba no type amount reaches the level 3 band
    return [a for a in TypeAllocation if a is not TypeAllocation.ONE_ONE_ONE]


def _mp_places_for(
    power: Power,
    num_herba: int,
) -> list[int]:
    leading = herba_slots(num_herba)
    if power.meal_power in leading:
        return [leading.index(power.meal_power)]
    if power.meal_power in HERBA_MEAL_POWERS:
        return []
    return list(range(len(leading), MAX_POWERS))


def get_target_configs(
    powers: Sequence[Power],
    num_herba: int,
) -> list[list[TargetConfig]]:
    """Every placement each requested power could take.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers.
    num_herba : int
        Herba mystica the recipe will hold.

    Returns
    -------
    list[list[TargetConfig]]
        One list per requested power, in request order. An empty inner
        list means the power cannot be placed with ``num_herba``.
    """
    config_lists = []
    for power in powers:
        configs = []
        for allocation in _allocations_for(num_herba):
            slots = ALLOCATION_SLOTS[allocation]
            for mp_place in _mp_places_for(power, num_herba):
                requirements = _level_requirements(allocation, mp_place, power.level)
                if requirements is None:
                    continue
                configs.append(
                    TargetConfig(
                        type_allocation=allocation,
                        type_place_index=slots[mp_place] - 1,
                        mp_place_index=mp_place,
                        num_herba=num_herba,
                        **requirements,
                    )
                )
        if not configs:
            logger.debug("No placement for %s with %d herba", power, num_herba)
        config_lists.append(configs)
    return config_lists


def _config_set_consistent(
    config_set: Sequence[TargetConfig],
    powers: Sequence[Power] | None,
) -> bool:
    mp_places = [c.mp_place_index for c in config_set]
    if len(set(mp_places)) != len(mp_places):
        return False
    if len({c.type_allocation for c in config_set}) > 1:
        return False
    if powers is None:
        return True

    type_at_place: dict[int, PowerType] = {}
    place_of_type: dict[PowerType, int] = {}
    for power, config in zip(powers, config_set):
        if not meal_power_has_type(power.meal_power):
            continue
        place = config.type_place_index
        if type_at_place.setdefault(place, power.type) != power.type:
            return False
        if place_of_type.setdefault(power.type, place) != place:
            return False
    return True


def permute_power_configs(
    config_lists: Sequence[Sequence[TargetConfig]],
    powers: Sequence[Power] | None = None,
) -> list[list[TargetConfig]]:
    """Cartesian product of per-power configs, minus impossible sets.

    Parameters
    ----------
    config_lists : sequence of sequence of TargetConfig
        Output of `get_target_configs`.
    powers : sequence of Power, optional
        Requested powers, aligned with ``config_lists``. When given,
        sets asking one type place for two types (or one type for two
        places) are dropped.

    Returns
    -------
    list[list[TargetConfig]]
        Config sets sharing one allocation with distinct meal power
        places.
    """
    return [
        list(config_set)
        for config_set in itertools.product(*config_lists)
        if _config_set_consistent(config_set, powers)
    ]


def select_power_at_target_position(
    powers: Sequence[Power],
    config: TargetConfig,
) -> Power | None:
    """Realized power sitting at ``config``'s meal power place."""
    if config.mp_place_index < len(powers):
        return powers[config.mp_place_index]
    return None


def get_type_targets_by_place(
    powers: Sequence[Power],
    type_places: Sequence[int],
) -> list[PowerType | None]:
    """Requested type at each of the three type places (``None`` if free)."""
    by_place: list[PowerType | None] = [None] * MAX_POWERS
    for power, place in zip(powers, type_places):
        if meal_power_has_type(power.meal_power):
            by_place[place] = power.type
    return by_place


def fill_in(
    values: Sequence[T | None],
    candidates: Iterable[T],
) -> list[T]:
    """Replace each ``None`` with the next unused candidate."""
    used = {v for v in values if v is not None}
    remaining = (c for c in candidates if c not in used)
    return [v if v is not None else next(remaining) for v in values]


def get_type_target_indices(
    powers: Sequence[Power],
    type_places: Sequence[int],
    ranked_types: Sequence[TypeBoost],
) -> list[PowerType]:
    """Three types by place: requested ones, the rest from the ranking."""
    return fill_in(
        get_type_targets_by_place(powers, type_places),
        [boost.type for boost in ranked_types],
    )


def get_meal_power_targets_by_place(
    powers: Sequence[Power],
    mp_places: Sequence[int],
    offset: int,
) -> list[MealPower | None]:
    """Requested meal power at each place after the ``offset`` herba places."""
    by_place: list[MealPower | None] = [None] * (MAX_POWERS - offset)
    for power, place in zip(powers, mp_places):
        if place >= offset:
            by_place[place - offset] = power.meal_power
    return by_place


def sort_target_powers_by_mp_place(
    powers: Sequence[Power],
    config_set: Sequence[TargetConfig],
) -> list[tuple[Power, TargetConfig]]:
    """Pair powers with their configs, last meal power place first."""
    return sorted(
        zip(powers, config_set),
        key=lambda pair: pair[1].mp_place_index,
        reverse=True,
    )
