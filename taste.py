"""Flavor ranking and the taste-driven meal power boost.

The two leading flavors of a sandwich pick one meal power (via
`TASTE_MAP`) that receives a flat bonus before meal powers are ranked.
`get_relative_taste_vector` estimates, per meal power, how much one more
ingredient moves the flavor ranking toward (positive) or away from
(negative) boosting that power.

Exports
-------
FlavorBoost
TasteRankCache
rank_flavor_boosts
get_boosted_meal_power
get_relative_taste_vector
get_flavor_profiles_for_power

Notes
-----
All functions are side-effect free. The only state is the optional
`TasteRankCache`, which the caller owns and scopes to one search.
"""

import math
from typing import (
    NamedTuple,
    Sequence,
)

from constants import (
    PRIMARY_FLAVORS,
    SECONDARY_FLAVORS,
    TASTE_MAP,
    Flavor,
    MealPower,
)


class FlavorBoost(NamedTuple):
    flavor: Flavor
    amount: float


def rank_flavor_boosts(
    flavor_vector: Sequence[float],
) -> tuple[FlavorBoost, ...]:
    """Rank all flavors by amount.

    Parameters
    ----------
    flavor_vector : sequence of float
        Accumulated flavor amounts, one entry per `Flavor`.

    Returns
    -------
    tuple[FlavorBoost, ...]
        Every flavor, amount descending; ties keep `Flavor` order.
    """
    return tuple(
        FlavorBoost(flavor, flavor_vector[flavor])
        for flavor in sorted(Flavor, key=lambda f: (-flavor_vector[f], f))
    )


class TasteRankCache:
    """Memo of flavor rankings keyed by the flavor vector.

    One instance lives for one top-level search; nothing is shared
    between searches.
    """

    def __init__(
        self,
    ):
        self._rankings: dict[tuple, tuple[FlavorBoost, ...]] = {}
        self.hits = 0
        self.misses = 0

    def rank(
        self,
        flavor_vector: Sequence[float],
    ) -> tuple[FlavorBoost, ...]:
        key = tuple(flavor_vector)
        ranking = self._rankings.get(key)
        if ranking is None:
            self.misses += 1
            ranking = rank_flavor_boosts(key)
            self._rankings[key] = ranking
        else:
            self.hits += 1
        return ranking

    def __len__(
        self,
    ) -> int:
        return len(self._rankings)


def get_boosted_meal_power(
    ranking: Sequence[FlavorBoost],
) -> MealPower | None:
    """Meal power boosted by the two leading flavors.

    Parameters
    ----------
    ranking : sequence of FlavorBoost
        Output of `rank_flavor_boosts`.

    Returns
    -------
    MealPower or None
        ``None`` when there is no positive flavor. A runner-up with no
        positive amount counts as the leading flavor again.
    """
    if not ranking or ranking[0].amount <= 0:
        return None

    first = ranking[0].flavor
    second = first
    if len(ranking) > 1 and ranking[1].amount > 0:
        second = ranking[1].flavor
    return TASTE_MAP[first][second]


def get_flavor_profiles_for_power(
    meal_power: MealPower,
) -> list[tuple[Flavor, Flavor]]:
    """All (first, second) flavor pairs that boost ``meal_power``."""
    return [
        (first, second)
        for first, row in TASTE_MAP.items()
        for second, boosted in row.items()
        if boosted is meal_power
    ]


def _scale_clamp(
    first: float,
    second: float,
) -> float:
    # 100 * clamp(first + second, -1, 1)
    return 100 * max(min(first + second, 1), -1)


def _max(
    values,
) -> float:
    # Empty max is -inf so the clamp saturates
    return max(values, default=-math.inf)


def _relative_taste_component(
    meal_power: MealPower,
    current: Sequence[float],
    ingredient: Sequence[float],
    highest_amount: float,
    highest_flavor: Flavor | None,
    second_amount: float,
) -> float:
    primary = PRIMARY_FLAVORS[meal_power]
    secondary = SECONDARY_FLAVORS[meal_power]
    num_primary = len(primary)
    num_secondary = len(secondary)
    num_total = num_primary + num_secondary
    if num_primary == 0:
        return 0.0

    non_primary = [f for f in Flavor if f not in primary]
    others = [f for f in non_primary if f not in secondary]

    if highest_amount == 0:
        # Nothing leads yet: either direction is equally informative
        highest_for_other = _max(
            ingredient[f] for f in others if current[f] >= highest_amount
        )

        def _spread(
            flavor: Flavor,
        ) -> float:
            amount = ingredient[flavor]
            return (amount - highest_for_other / 2) / max(amount, 1)

        return _scale_clamp(
            num_secondary * max(_spread(f) for f in primary) / num_total,
            num_primary * max(_spread(f) for f in secondary) / num_total,
        )

    if highest_flavor not in primary:
        secondary_first = [f for f in secondary if current[f] >= highest_amount]
        others_below = [f for f in others if current[f] < highest_amount]
        highest_leader_gain = _max(
            ingredient[f] for f in non_primary if current[f] >= highest_amount
        )
        primary_components = [
            (ingredient[f] - highest_leader_gain)
            / max(
                max(current[f] + 1, highest_amount) - current[f],
                ingredient[f],
                1,
            )
            for f in primary
        ]

        if not secondary_first:
            # Attack on both primary and secondary
            highest_other_gain = _max(ingredient[f] for f in others_below)
            secondary_components = [
                (ingredient[f] - highest_other_gain)
                / max(highest_amount - current[f], ingredient[f], 1)
                for f in secondary
            ]
            return _scale_clamp(
                num_secondary * max(primary_components) / num_total,
                num_primary * max(secondary_components) / num_total,
            )

        # Attack on primary, defend the secondary already in front
        other_to_highest = [
            ingredient[f] / max(highest_amount - current[f], ingredient[f], 1)
            for f in others_below
        ]
        return _scale_clamp(
            num_secondary * max(primary_components) / num_total,
            num_primary * -_max(other_to_highest) / num_total,
        )

    # A primary flavor leads
    secondary_second = [f for f in secondary if current[f] == second_amount]
    non_primaries_from_second = [
        ingredient[f] / max(highest_amount - current[f], ingredient[f], 1)
        for f in non_primary
        if current[f] >= second_amount
    ]
    others_to_second = [
        ingredient[f] / max(second_amount - current[f], ingredient[f], 1)
        for f in others
        if current[f] < second_amount
    ]

    if second_amount == 0 or not secondary_second:
        # Defend primary, attack the second place
        secondaries_to_second = [
            ingredient[f] / max(second_amount - current[f], ingredient[f], 1)
            for f in secondary
            if current[f] < second_amount
        ]
        return _scale_clamp(
            num_secondary * -max([*non_primaries_from_second, 0]) / num_total,
            num_primary * max([*secondaries_to_second, 0])
            - max([*others_to_second, 0]) / num_total,
        )

    # Defend both places
    return _scale_clamp(
        num_secondary * -max([*non_primaries_from_second, 0]) / num_total,
        num_primary * -max([*others_to_second, 0]) / num_total,
    )


def get_relative_taste_vector(
    current_flavors: Sequence[float],
    ingredient_flavors: Sequence[float],
    cache: TasteRankCache | None = None,
) -> tuple[float, ...]:
    """Per meal power taste pull of adding one ingredient.

    Parameters
    ----------
    current_flavors : sequence of float
        Accumulated flavor vector of the sandwich so far.
    ingredient_flavors : sequence of float
        Flavor vector of the candidate ingredient.
    cache : TasteRankCache, optional
        Ranking memo for ``current_flavors``.

    Returns
    -------
    tuple[float, ...]
        One value per `MealPower`, each in ``[-100, 100]``. Powers that
        no flavor drives (Sparkling, Title) are always ``0``.
    """
    ranking = (
        cache.rank(current_flavors)
        if cache is not None
        else rank_flavor_boosts(current_flavors)
    )
    highest_amount = ranking[0].amount if ranking else 0
    highest_flavor = ranking[0].flavor if ranking else None
    second_amount = ranking[1].amount if len(ranking) > 1 else 0

    return tuple(
        _relative_taste_component(
            meal_power,
            current_flavors,
            ingredient_flavors,
            highest_amount,
            highest_flavor,
            second_amount,
        )
        for meal_power in MealPower
    )
