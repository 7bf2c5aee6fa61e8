"""Recursive recipe search for a single requested power.

Starting from an empty sandwich, repeatedly asks the scorer for the best
next ingredients, branches over each, and stops a branch as soon as the
requested power shows up in a sandwich holding at least one filling and
one condiment. Among the successful branches of a node the cheapest
(fewest fillings, then fewest condiments) wins.

Exports
-------
SearchStatus
SearchState
SearchOutcome
search_recipe
make_recipe_for_effect

Notes
-----
The only state shared between branches is the visited set and the
flavor ranking cache, both owned by a single call.
"""

import logging
from dataclasses import (
    dataclass,
    field,
    replace,
)
from enum import Enum
from typing import (
    Iterable,
)

from catalog import get_default_catalog
from config import (
    Config,
    get_cached_config,
)
from constants import (
    CONDIMENT_COST,
    FILLING_COST,
    NUM_FLAVORS,
    NUM_MEAL_POWERS,
    NUM_TYPES,
    MealPower,
)
from models.ingredient import Ingredient
from models.recipe import (
    Power,
    Recipe,
)
from placement import (
    TargetConfig,
    get_target_configs,
    select_power_at_target_position,
)
from powers import (
    boost_meal_power_vector,
    evaluate_boosts,
    get_target_num_herba,
    meal_power_has_type,
    powers_match,
    rank_meal_power_boosts,
    rank_type_boosts,
    requested_powers_valid,
)
from scorer import select_ingredient_candidates
from taste import (
    TasteRankCache,
    get_boosted_meal_power,
)
from vector_math import (
    add,
    zeros,
)

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    FOUND = "found"
    INVALID_REQUEST = "invalid_request"
    EXHAUSTED = "exhausted"
    BUDGET_EXHAUSTED = "budget_exhausted"


@dataclass(frozen=True)
class SearchState:
    """One node of the search tree; children are built with `replace`."""

    fillings: tuple[Ingredient, ...] = ()
    condiments: tuple[Ingredient, ...] = ()
    skip_ingredients: frozenset[str] = frozenset()
    meal_power_vector: tuple[float, ...] = field(
        default_factory=lambda: zeros(NUM_MEAL_POWERS)
    )
    type_vector: tuple[float, ...] = field(default_factory=lambda: zeros(NUM_TYPES))
    flavor_vector: tuple[float, ...] = field(
        default_factory=lambda: zeros(NUM_FLAVORS)
    )
    powers: tuple[Power, ...] = ()
    target_found: bool = False
    boosted_meal_power: MealPower | None = None
    allow_herba: bool = False

    @property
    def herba_count(
        self,
    ) -> int:
        return sum(1 for c in self.condiments if c.is_herba)

    def visit_key(
        self,
    ) -> tuple[str, ...]:
        # Order-insensitive: permutations of one multiset share a key
        return tuple(sorted(i.name for i in self.fillings + self.condiments))

    def to_recipe(
        self,
    ) -> Recipe:
        return Recipe(
            fillings=list(self.fillings),
            condiments=list(self.condiments),
            powers=list(self.powers),
            meal_power_vector=self.meal_power_vector,
            type_vector=self.type_vector,
            flavor_vector=self.flavor_vector,
        )


@dataclass
class SearchOutcome:
    """Result of `search_recipe`.

    ``recipe`` is set only when ``status`` is ``FOUND``. ``steps`` counts
    the search states entered.
    """

    status: SearchStatus
    recipe: Recipe | None = None
    steps: int = 0


class _SearchContext:
    """Per-call bookkeeping: visited set, ranking cache and step budget."""

    def __init__(
        self,
        max_steps: int | None,
    ):
        self.visited: set[tuple[str, ...]] = set()
        self.cache = TasteRankCache()
        self.max_steps = max_steps
        self.steps = 0
        self.budget_exhausted = False

    def enter(
        self,
        state: SearchState,
    ) -> bool:
        """Count a step and mark ``state`` visited; False if it must be skipped."""
        if self.budget_exhausted:
            return False
        if self.max_steps is not None and self.steps >= self.max_steps:
            self.budget_exhausted = True
            return False
        self.steps += 1

        key = state.visit_key()
        if key in self.visited:
            return False
        self.visited.add(key)
        return True


def _select_power(
    target_power: Power,
    candidate_powers: list[Power | None],
) -> Power | None:
    # Prefer a realized power that already shares something with the target
    if len(candidate_powers) > 1:
        for power in candidate_powers:
            if power is not None and (
                power.meal_power == target_power.meal_power
                or power.type == target_power.type
                or power.level >= target_power.level
            ):
                return power
    return candidate_powers[0] if candidate_powers else None


def _add_ingredient(
    state: SearchState,
    ingredient: Ingredient,
    target_power: Power,
    target_num_herba: int,
    max_pieces: int,
    cache: TasteRankCache,
) -> SearchState:
    fillings = state.fillings
    condiments = state.condiments
    skip = state.skip_ingredients

    if ingredient.is_filling:
        fillings = fillings + (ingredient,)
        count = sum(1 for f in fillings if f.name == ingredient.name)
        if count * ingredient.pieces + ingredient.pieces > max_pieces:
            skip = skip | {ingredient.name}
    else:
        condiments = condiments + (ingredient,)

    meal_power_vector = add(state.meal_power_vector, ingredient.meal_power_vector)
    type_vector = add(state.type_vector, ingredient.type_vector)
    flavor_vector = add(state.flavor_vector, ingredient.flavor_vector)
    boosted = get_boosted_meal_power(cache.rank(flavor_vector))
    powers = evaluate_boosts(meal_power_vector, boosted, type_vector)

    child = replace(
        state,
        fillings=fillings,
        condiments=condiments,
        skip_ingredients=skip,
        meal_power_vector=meal_power_vector,
        type_vector=type_vector,
        flavor_vector=flavor_vector,
        powers=tuple(powers),
        target_found=any(powers_match(p, target_power) for p in powers),
        boosted_meal_power=boosted,
    )
    return replace(
        child,
        allow_herba=state.allow_herba and child.herba_count < target_num_herba,
    )


def _recurse(
    state: SearchState,
    target_power: Power,
    target_configs: list[TargetConfig],
    target_num_herba: int,
    ingredients: tuple[Ingredient, ...],
    config: Config,
    context: _SearchContext,
) -> Recipe | None:
    capacity = config.capacity
    if (
        len(state.fillings) >= capacity.max_fillings
        and len(state.condiments) >= capacity.max_condiments
    ):
        return None
    if not context.enter(state):
        return None

    found = state.target_found
    current_boosted = boost_meal_power_vector(
        state.meal_power_vector, state.boosted_meal_power
    )
    selected = _select_power(
        target_power,
        [select_power_at_target_position(state.powers, c) for c in target_configs],
    )
    condiments_allowed = not found or not state.condiments

    check_meal_power = (
        (found and condiments_allowed)
        or (
            found
            and target_power.meal_power
            not in (MealPower.SPARKLING, MealPower.TITLE)
        )
        or selected is None
        or selected.meal_power != target_power.meal_power
    )
    check_type = found or (
        meal_power_has_type(target_power.meal_power)
        and (selected is None or selected.type != target_power.type)
    )
    check_level = selected is None or selected.level < target_power.level

    candidates = select_ingredient_candidates(
        target_powers=[target_power],
        target_configs=[target_configs],
        ingredients=ingredients,
        current_boosted_meal_power_vector=current_boosted,
        current_type_vector=state.type_vector,
        current_flavor_vector=state.flavor_vector,
        ranked_type_boosts=rank_type_boosts(state.type_vector),
        ranked_meal_power_boosts=rank_meal_power_boosts(
            state.meal_power_vector, state.boosted_meal_power
        ),
        check_meal_power=check_meal_power,
        check_type=check_type,
        check_level=check_level,
        remaining_fillings=(
            capacity.max_fillings - len(state.fillings)
            if not found or not state.fillings
            else 0
        ),
        remaining_condiments=(
            capacity.max_condiments - len(state.condiments)
            if condiments_allowed
            else 0
        ),
        allow_herba=state.allow_herba,
        skip_ingredients=state.skip_ingredients,
        search=config.search,
        weights=config.weights,
        cache=context.cache,
    )

    recipes = []
    for ingredient in candidates:
        child = _add_ingredient(
            state,
            ingredient,
            target_power,
            target_num_herba,
            capacity.max_pieces,
            context.cache,
        )
        if child.target_found and child.fillings and child.condiments:
            recipes.append(child.to_recipe())
            continue
        recipe = _recurse(
            child,
            target_power,
            target_configs,
            target_num_herba,
            ingredients,
            config,
            context,
        )
        if recipe is not None:
            recipes.append(recipe)

    if not recipes:
        return None
    # min() keeps the first of equal-cost recipes
    return min(recipes, key=lambda r: r.cost(FILLING_COST, CONDIMENT_COST))


def search_recipe(
    power: Power,
    ingredients: Iterable[Ingredient],
    config: Config | None = None,
) -> SearchOutcome:
    """Search for a recipe realizing ``power``.

    Parameters
    ----------
    power : Power
        Requested power; its level is a minimum.
    ingredients : iterable of Ingredient
        Catalog, in the order used to break score ties.
    config : Config, optional
        Search tunables; the cached configuration when omitted.

    Returns
    -------
    SearchOutcome
        ``INVALID_REQUEST`` without searching when the power cannot be
        realized at all, ``BUDGET_EXHAUSTED`` when ``search.max_steps``
        cut the search short before anything was found, ``EXHAUSTED``
        when the whole space was explored without success.
    """
    config = config or get_cached_config()
    if not requested_powers_valid([power]):
        logger.debug("Invalid request: %s", power)
        return SearchOutcome(SearchStatus.INVALID_REQUEST)

    target_num_herba = get_target_num_herba([power])
    target_configs = get_target_configs([power], target_num_herba)[0]
    context = _SearchContext(config.search.max_steps)

    recipe = _recurse(
        SearchState(allow_herba=target_num_herba > 0),
        power,
        target_configs,
        target_num_herba,
        tuple(ingredients),
        config,
        context,
    )
    logger.debug(
        "Search for %s: %d steps, %d cached rankings",
        power,
        context.steps,
        len(context.cache),
    )

    if recipe is not None:
        return SearchOutcome(SearchStatus.FOUND, recipe, context.steps)
    if context.budget_exhausted:
        return SearchOutcome(SearchStatus.BUDGET_EXHAUSTED, None, context.steps)
    return SearchOutcome(SearchStatus.EXHAUSTED, None, context.steps)


def make_recipe_for_effect(
    power: Power,
    catalog: Iterable[Ingredient] | None = None,
    config: Config | None = None,
) -> Recipe | None:
    """Recipe realizing ``power``, or ``None`` if none was found."""
    if catalog is None:
        catalog = get_default_catalog()
    return search_recipe(power, catalog, config).recipe
