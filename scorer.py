"""Candidate scoring: which ingredients move a sandwich toward its target.

Scores every catalog ingredient by how well its meal power and type
contributions line up with the remaining meal power, type and level
deltas, weights each dimension by how urgent it is given the slots left,
and returns the few best as branching candidates.

Exports
-------
ScoredIngredient
get_mp_score_weight
get_type_score_weight
select_ingredient_candidates
"""

import logging
import math
from typing import (
    Iterable,
    NamedTuple,
    Sequence,
)

from config import (
    SearchConfig,
    WeightsConfig,
)
from constants import (
    MP_BASE_DELTA_FLOOR,
    MealPower,
)
from models.ingredient import Ingredient
from models.recipe import Power
from placement import (
    TargetConfig,
    get_type_target_indices,
    permute_power_configs,
)
from powers import (
    MealPowerBoost,
    TypeBoost,
)
from target_vectors import (
    get_target_level_vector,
    get_target_meal_power_vector,
    get_target_type_vector,
)
from taste import (
    TasteRankCache,
    get_relative_taste_vector,
)
from vector_math import (
    add,
    clamp_positive_to_zero,
    diff,
    inner_product,
    norm,
    positive_part,
)

logger = logging.getLogger(__name__)


class ScoredIngredient(NamedTuple):
    ingredient: Ingredient | None
    score: float


def _base_delta(
    target_vector: Sequence[float],
    current_vector: Sequence[float],
) -> float:
    # Distance from a floor that ignores progress already made
    return norm(diff(target_vector, clamp_positive_to_zero(current_vector)))


def get_mp_score_weight(
    *,
    target_vector: Sequence[float],
    delta_vector: Sequence[float],
    current_vector: Sequence[float],
    remaining_fillings: int,
    remaining_condiments: int,
    weights: WeightsConfig | None = None,
) -> float:
    """Urgency of meal power progress per remaining slot.

    Parameters
    ----------
    target_vector : sequence of float
        Target boosted meal power vector.
    delta_vector : sequence of float
        ``target_vector - current_vector``.
    current_vector : sequence of float
        Current boosted meal power vector.
    remaining_fillings, remaining_condiments : int
        Slots still open for this step.
    weights : WeightsConfig, optional
        Per-slot progress constants; defaults apply when omitted.

    Returns
    -------
    float
        ``|delta| / capacity / max(base_delta, 100)``; ``0.0`` when no
        slot remains.
    """
    weights = weights or WeightsConfig()
    capacity = (
        weights.mp_filling * remaining_fillings
        + weights.mp_condiment * remaining_condiments
    )
    if capacity == 0:
        return 0.0
    base_delta = _base_delta(target_vector, current_vector)
    urgency = norm(delta_vector) / capacity
    return urgency / max(base_delta, MP_BASE_DELTA_FLOOR)


def get_type_score_weight(
    *,
    target_vector: Sequence[float],
    delta_vector: Sequence[float],
    current_vector: Sequence[float],
    remaining_fillings: int,
    remaining_condiments: int,
    weights: WeightsConfig | None = None,
) -> float:
    """Urgency of type (or level) progress per remaining slot.

    Same parameters as `get_mp_score_weight`. Returns
    ``|delta| / (base_delta * capacity)``, or ``0.0`` when that
    denominator vanishes.
    """
    weights = weights or WeightsConfig()
    capacity = (
        weights.type_filling * remaining_fillings
        + weights.type_condiment * remaining_condiments
    )
    denominator = _base_delta(target_vector, current_vector) * capacity
    if denominator == 0:
        return 0.0
    return norm(delta_vector) / denominator


def _is_excluded(
    ingredient: Ingredient,
    remaining_fillings: int,
    remaining_condiments: int,
    allow_herba: bool,
    skip_ingredients: Iterable[str],
) -> bool:
    if ingredient.is_filling and remaining_fillings <= 0:
        return True
    if ingredient.is_condiment and remaining_condiments <= 0:
        return True
    if ingredient.is_herba and not allow_herba:
        return True
    return ingredient.name in skip_ingredients


def select_ingredient_candidates(
    *,
    target_powers: Sequence[Power],
    target_configs: Sequence[Sequence[TargetConfig]],
    ingredients: Sequence[Ingredient],
    current_boosted_meal_power_vector: Sequence[float],
    current_type_vector: Sequence[float],
    current_flavor_vector: Sequence[float],
    ranked_type_boosts: Sequence[TypeBoost],
    ranked_meal_power_boosts: Sequence[MealPowerBoost],
    check_meal_power: bool,
    check_type: bool,
    check_level: bool,
    remaining_fillings: int,
    remaining_condiments: int,
    allow_herba: bool,
    skip_ingredients: frozenset[str] = frozenset(),
    search: SearchConfig | None = None,
    weights: WeightsConfig | None = None,
    cache: TasteRankCache | None = None,
) -> list[Ingredient]:
    """Best next ingredients for reaching ``target_powers``.

    Parameters
    ----------
    target_powers : sequence of Power
        Requested powers.
    target_configs : sequence of sequence of TargetConfig
        Placements per requested power (see `placement.get_target_configs`).
    ingredients : sequence of Ingredient
        Catalog to score, in catalog order.
    current_boosted_meal_power_vector, current_type_vector, current_flavor_vector
        Accumulated vectors of the sandwich so far.
    ranked_type_boosts, ranked_meal_power_boosts
        Current rankings.
    check_meal_power, check_type, check_level : bool
        Dimensions that still need progress; the others weigh 0.
    remaining_fillings, remaining_condiments : int
        Slots open for this step.
    allow_herba : bool
        Whether herba mystica may still be added.
    skip_ingredients : frozenset of str
        Names that must not be added (piece cap reached).
    search : SearchConfig, optional
        Threshold, candidate count and condiment bonus.
    weights : WeightsConfig, optional
        Per-slot progress constants.
    cache : TasteRankCache, optional
        Flavor ranking memo for this search.

    Returns
    -------
    list[Ingredient]
        At most ``search.max_candidates`` ingredients, best first, each
        scoring at least ``best - threshold * |best|``. Empty when no
        placement config set exists.
    """
    search = search or SearchConfig()
    weights = weights or WeightsConfig()

    # Pick the config set that needs the least additional type work
    chosen = None
    best_norm = math.inf
    for config_set in permute_power_configs(target_configs, target_powers):
        type_places = [c.type_place_index for c in config_set]
        target_types = get_type_target_indices(
            target_powers, type_places, ranked_type_boosts
        )
        candidate_type_target = (
            get_target_type_vector(
                target_powers, config_set, target_types, current_type_vector
            )
            if check_type
            else tuple(current_type_vector)
        )
        candidate_level_target = get_target_level_vector(
            target_powers, config_set, target_types, current_type_vector
        )
        delta_type = diff(candidate_type_target, current_type_vector)
        delta_level = diff(candidate_level_target, current_type_vector)
        delta_type_norm = norm(delta_type)
        delta_level_norm = norm(delta_level)

        if max(delta_level_norm, delta_type_norm) < best_norm:
            best_norm = max(delta_level_norm, delta_type_norm)
            chosen = (
                config_set,
                candidate_type_target,
                candidate_level_target,
                delta_type,
                delta_level,
                delta_type_norm,
                delta_level_norm,
            )

    if chosen is None:
        logger.debug("No placement config set for %s", list(map(str, target_powers)))
        return []

    (
        config_set,
        target_type_vector,
        target_level_vector,
        delta_type,
        delta_level,
        delta_type_norm,
        delta_level_norm,
    ) = chosen

    target_mp_vector = get_target_meal_power_vector(
        target_powers,
        config_set,
        ranked_meal_power_boosts,
        current_boosted_meal_power_vector,
    )
    delta_mp = diff(target_mp_vector, current_boosted_meal_power_vector)
    delta_mp_norm = norm(delta_mp)

    slots = {
        "remaining_fillings": remaining_fillings,
        "remaining_condiments": remaining_condiments,
        "weights": weights,
    }
    type_weight = (
        get_type_score_weight(
            target_vector=target_type_vector,
            delta_vector=delta_type,
            current_vector=current_type_vector,
            **slots,
        )
        if check_type
        else 0.0
    )
    level_weight = (
        get_type_score_weight(
            target_vector=target_level_vector,
            delta_vector=delta_level,
            current_vector=current_type_vector,
            **slots,
        )
        if check_level
        else 0.0
    )
    mp_weight = (
        get_mp_score_weight(
            target_vector=target_mp_vector,
            delta_vector=delta_mp,
            current_vector=current_boosted_meal_power_vector,
            **slots,
        )
        if check_meal_power
        else 0.0
    )

    # Target already met but more ingredients are required: force a direction
    if delta_type_norm == 0 and type_weight == 0 and mp_weight == 0:
        type_places = [c.type_place_index for c in config_set]
        target_types = get_type_target_indices(
            target_powers, type_places, ranked_type_boosts
        )
        target_type_vector = get_target_type_vector(
            target_powers,
            config_set,
            target_types,
            current_type_vector,
            force_diff=True,
        )
        delta_type = diff(target_type_vector, current_type_vector)
        delta_type_norm = norm(delta_type)
        type_weight = 1.0

    requested = {power.meal_power for power in target_powers}
    skip = frozenset(skip_ingredients)

    def score(
        ingredient: Ingredient,
    ) -> ScoredIngredient:
        if _is_excluded(
            ingredient, remaining_fillings, remaining_condiments, allow_herba, skip
        ):
            return ScoredIngredient(None, -math.inf)

        relative_taste = get_relative_taste_vector(
            current_flavor_vector, ingredient.flavor_vector, cache
        )
        relevant_taste = tuple(
            amount if MealPower(index) in requested or amount < 0 else 0
            for index, amount in enumerate(relative_taste)
        )
        boosted_mp = add(ingredient.meal_power_vector, relevant_taste)

        n1 = delta_mp_norm * math.sqrt(norm(positive_part(boosted_mp)))
        mp_product = (
            inner_product(boosted_mp, delta_mp) / n1
            if check_meal_power and n1 != 0
            else 0.0
        )
        n2 = math.sqrt(norm(positive_part(ingredient.type_vector))) * delta_type_norm
        type_product = (
            inner_product(ingredient.type_vector, delta_type) / n2
            if check_type and n2 != 0
            else 0.0
        )
        level_product = (
            inner_product(ingredient.type_vector, delta_level) / delta_level_norm
            if delta_level_norm != 0
            else 0.0
        )

        total = (
            mp_product * mp_weight
            + type_product * type_weight
            + level_product * level_weight
        )
        if ingredient.is_condiment and not ingredient.is_herba:
            total *= 1 + search.condiment_bonus
        return ScoredIngredient(ingredient, total)

    scored = [score(ingredient) for ingredient in ingredients]
    # Stable: equal scores keep catalog order
    scored.sort(key=lambda s: s.score, reverse=True)
    if not scored:
        return []

    best = scored[0].score
    min_score = best - search.candidate_score_threshold * abs(best)
    candidates = [
        s.ingredient
        for s in scored
        if s.ingredient is not None and s.score >= min_score
    ]

    logger.debug(
        "Weights mp=%.4g type=%.4g level=%.4g; candidates: %s",
        mp_weight,
        type_weight,
        level_weight,
        ", ".join(c.name for c in candidates[: search.max_candidates]),
    )
    return candidates[: search.max_candidates]
