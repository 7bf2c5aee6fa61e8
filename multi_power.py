"""Multi-power mode: recipes for several requested powers via integer programs.

Each way the requested powers could be placed (herba count, config set,
flavor profile, meal powers by place) becomes a `Target`. Every target is
turned into a linear `Model` over ingredient counts and handed to a
solver; the cheapest solution whose realized powers match the request
wins.

Exports
-------
Target
Constraint
Model
Solution
Solver
select_initial_targets
build_model
make_recipe_for_powers

Notes
-----
The solver is a collaborator: any callable taking a `Model` and
returning a `Solution` works. `lp_solver.solve_with_pulp` is the default.
"""

import logging
from dataclasses import (
    dataclass,
    field,
)
from typing import (
    Callable,
    Iterable,
    Sequence,
)

from catalog import (
    IngredientCatalog,
    get_default_catalog,
)
from config import (
    Config,
    get_cached_config,
)
from constants import (
    CONDIMENT_COST,
    DIFF70_MARGIN,
    DIFF70_SECOND_FACTOR,
    FILLING_COST,
    FLAVOR_BOOST_AMOUNT,
    HERBA_MEAL_POWERS,
    SPARKLING_MIN_AMOUNT,
    Flavor,
    MealPower,
    PowerType,
    TypeAllocation,
)
from models.ingredient import Ingredient
from models.recipe import (
    Power,
    Recipe,
)
from placement import (
    TargetConfig,
    fill_in,
    get_meal_power_targets_by_place,
    get_target_configs,
    get_type_targets_by_place,
    herba_slots,
    permute_power_configs,
)
from powers import (
    get_powers_for_ingredients,
    meal_power_has_type,
    mix_ingredients,
    powers_match,
    requested_powers_valid,
)
from taste import get_flavor_profiles_for_power

logger = logging.getLogger(__name__)


@dataclass
class Target:
    """One concrete placement of the requested powers.

    Attributes
    ----------
    powers : list[Power]
        Requested powers.
    config_set : list[TargetConfig]
        Placement per power.
    type_allocation : TypeAllocation
        Allocation shared by ``config_set``.
    num_herba : int
        Herba mystica the recipe must hold.
    types_by_place : list[PowerType]
        Type wanted at ranks 1 to 3.
    meal_powers_by_place : list[MealPower | None]
        Meal power wanted at each place (herba places included).
    boost_power : MealPower or None
        Meal power the flavors must boost.
    flavor_profile : tuple[Flavor, Flavor] or None
        Leading two flavors producing ``boost_power``.
    first_type_gte, first_type_lte, third_type_gte : int or None
        Level thresholds on the ranked type amounts.
    diff70 : bool
        ``first - 1.5 * second >= 70`` must hold.
    """

    powers: list[Power]
    config_set: list[TargetConfig]
    type_allocation: TypeAllocation
    num_herba: int
    types_by_place: list[PowerType]
    meal_powers_by_place: list[MealPower | None]
    boost_power: MealPower | None = None
    flavor_profile: tuple[Flavor, Flavor] | None = None
    first_type_gte: int | None = None
    first_type_lte: int | None = None
    third_type_gte: int | None = None
    diff70: bool = False


@dataclass
class Constraint:
    """``lower_bound <= sum(coef * count[name]) <= upper_bound``."""

    coefficients: dict[str, float]
    lower_bound: float | None = None
    upper_bound: float | None = None
    name: str = ""


@dataclass
class Model:
    """Integer program over non-negative ingredient counts (minimized)."""

    variables: list[str]
    objective: dict[str, float]
    constraints: list[Constraint] = field(default_factory=list)


@dataclass
class Solution:
    """Solver result; ``variables`` maps ingredient name to count."""

    status: str
    variables: dict[str, int] = field(default_factory=dict)
    objective_value: float | None = None

    @property
    def feasible(
        self,
    ) -> bool:
        return self.status == "optimal"


Solver = Callable[[Model], Solution]


def _herba_targets(
    powers: Sequence[Power],
    avoid_herba: bool,
) -> list[int]:
    """Herba counts worth trying, most likely to succeed first."""
    if any(p.meal_power is MealPower.SPARKLING for p in powers):
        return [2]
    if any(p.level == 3 for p in powers):
        return [2, 1] if avoid_herba else [2]
    if any(p.meal_power is MealPower.TITLE for p in powers):
        return [1]
    if any(p.level == 2 for p in powers):
        return [1, 0]
    return [0]


def _thresholds(
    config_set: Sequence[TargetConfig],
) -> tuple[int | None, int | None, int | None]:
    first_gte = None
    third_gte = None
    first_lte = None
    for config in config_set:
        lower = [
            v
            for v in (
                config.first_type_gt + 1 if config.first_type_gt is not None else None,
                config.first_type_gte,
                config.third_type_gte,
            )
            if v is not None
        ]
        if lower:
            first_gte = max([first_gte or 0, *lower])
        if config.third_type_gte is not None:
            third_gte = max(third_gte or 0, config.third_type_gte)
        if config.first_type_lte is not None:
            first_lte = (
                config.first_type_lte
                if first_lte is None
                else min(first_lte, config.first_type_lte)
            )
    return first_gte, first_lte, third_gte


def _meal_power_arrangements(
    by_place: list[MealPower | None],
) -> list[list[MealPower | None]]:
    """Fill open places ahead of a requested one with every free meal power."""
    free = [mp for mp in MealPower if mp not in HERBA_MEAL_POWERS]
    arrangements = [by_place]
    for place in range(len(by_place)):
        if by_place[place] is not None:
            continue
        if all(mp is None for mp in by_place[place + 1 :]):
            break
        arrangements = [
            arrangement[:place] + [choice] + arrangement[place + 1 :]
            for arrangement in arrangements
            for choice in free
            if choice not in arrangement
        ]
    return arrangements


def select_initial_targets(
    powers: Sequence[Power],
    avoid_herba: bool = True,
) -> list[Target]:
    """Every concrete placement worth modelling for ``powers``.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers (already validated).
    avoid_herba : bool, optional
        Also try one herba where a level 3 request could use two.

    Returns
    -------
    list[Target]
        Targets in generation order: herba count, config set, boosted
        power, flavor profile, meal power arrangement.
    """
    targets = []
    flavor_independent = all(p.meal_power in HERBA_MEAL_POWERS for p in powers)

    for num_herba in _herba_targets(powers, avoid_herba):
        config_lists = get_target_configs(powers, num_herba)
        leading = list(herba_slots(num_herba))

        for config_set in permute_power_configs(config_lists, powers):
            types_by_place = fill_in(
                get_type_targets_by_place(
                    powers, [c.type_place_index for c in config_set]
                ),
                PowerType,
            )
            by_place = get_meal_power_targets_by_place(
                powers, [c.mp_place_index for c in config_set], len(leading)
            )
            arrangements = [
                leading + arrangement
                for arrangement in _meal_power_arrangements(by_place)
            ]
            first_gte, first_lte, third_gte = _thresholds(config_set)
            common = {
                "powers": list(powers),
                "config_set": list(config_set),
                "type_allocation": config_set[0].type_allocation,
                "num_herba": num_herba,
                "types_by_place": types_by_place,
                "first_type_gte": first_gte,
                "first_type_lte": first_lte,
                "third_type_gte": third_gte,
                "diff70": any(c.diff70 for c in config_set),
            }

            if flavor_independent:
                targets.extend(
                    Target(meal_powers_by_place=arrangement, **common)
                    for arrangement in arrangements
                )
                continue

            for power in powers:
                for profile in get_flavor_profiles_for_power(power.meal_power):
                    targets.extend(
                        Target(
                            meal_powers_by_place=arrangement,
                            boost_power=power.meal_power,
                            flavor_profile=profile,
                            **common,
                        )
                        for arrangement in arrangements
                    )
    return targets


def _row(
    ingredients: Iterable[Ingredient],
    value,
) -> dict[str, float]:
    """Coefficient row from ``value(ingredient)``, zeros left out."""
    row = {}
    for ingredient in ingredients:
        coefficient = value(ingredient)
        if coefficient:
            row[ingredient.name] = coefficient
    return row


def _tie_bound(
    greater: int,
    lesser: int,
) -> int:
    # Ties rank by enumeration order, so a later index must strictly win
    return 0 if greater < lesser else 1


def _flavor_constraints(
    ingredients: Sequence[Ingredient],
    profile: tuple[Flavor, Flavor],
) -> list[Constraint]:
    first, second = profile
    constraints = [
        Constraint(
            _row(ingredients, lambda i: i.flavor_vector[first]),
            lower_bound=1,
            name=f"flavor_{first.name}_positive",
        )
    ]
    if first == second:
        # Runner-up must not be positive
        constraints.extend(
            Constraint(
                _row(ingredients, lambda i, f=flavor: i.flavor_vector[f]),
                upper_bound=0,
                name=f"flavor_{flavor.name}_not_positive",
            )
            for flavor in Flavor
            if flavor != first
        )
        return constraints

    constraints.append(
        Constraint(
            _row(ingredients, lambda i: i.flavor_vector[first] - i.flavor_vector[second]),
            lower_bound=_tie_bound(first, second),
            name=f"flavor_{first.name}_over_{second.name}",
        )
    )
    constraints.append(
        Constraint(
            _row(ingredients, lambda i: i.flavor_vector[second]),
            lower_bound=1,
            name=f"flavor_{second.name}_positive",
        )
    )
    for flavor in Flavor:
        if flavor in (first, second):
            continue
        constraints.append(
            Constraint(
                _row(
                    ingredients,
                    lambda i, f=flavor: i.flavor_vector[second] - i.flavor_vector[f],
                ),
                lower_bound=_tie_bound(second, flavor),
                name=f"flavor_{second.name}_over_{flavor.name}",
            )
        )
    return constraints


def _meal_power_difference(
    ingredients: Sequence[Ingredient],
    greater: MealPower,
    lesser: MealPower,
    boost_power: MealPower | None,
) -> Constraint:
    offset = 0
    if greater == boost_power:
        offset = -FLAVOR_BOOST_AMOUNT
    elif lesser == boost_power:
        offset = FLAVOR_BOOST_AMOUNT
    return Constraint(
        _row(
            ingredients,
            lambda i: i.meal_power_vector[greater] - i.meal_power_vector[lesser],
        ),
        lower_bound=_tie_bound(greater, lesser) + offset,
        name=f"mp_{greater.name}_over_{lesser.name}",
    )


def _meal_power_constraints(
    ingredients: Sequence[Ingredient],
    target: Target,
) -> list[Constraint]:
    constraints = []
    for power in target.powers:
        if power.meal_power in HERBA_MEAL_POWERS:
            floor = (
                SPARKLING_MIN_AMOUNT if power.meal_power is MealPower.SPARKLING else 1
            )
            constraints.append(
                Constraint(
                    _row(ingredients, lambda i, mp=power.meal_power: i.meal_power_vector[mp]),
                    lower_bound=floor,
                    name=f"mp_{power.meal_power.name}_floor",
                )
            )

    regular = [
        mp
        for mp in target.meal_powers_by_place
        if mp is not None and mp not in HERBA_MEAL_POWERS
    ]
    for greater, lesser in zip(regular, regular[1:]):
        constraints.append(
            _meal_power_difference(ingredients, greater, lesser, target.boost_power)
        )
    if regular:
        last = regular[-1]
        if last != target.boost_power:
            constraints.append(
                Constraint(
                    _row(ingredients, lambda i: i.meal_power_vector[last]),
                    lower_bound=1,
                    name=f"mp_{last.name}_positive",
                )
            )
        for meal_power in MealPower:
            if meal_power in HERBA_MEAL_POWERS or meal_power in regular:
                continue
            constraints.append(
                _meal_power_difference(
                    ingredients, last, meal_power, target.boost_power
                )
            )
    return constraints


def _ranked_depth(
    target: Target,
) -> int:
    """How many leading type ranks the placement pins down."""
    if target.third_type_gte is not None:
        return 3
    places = [
        config.type_place_index + 1
        for power, config in zip(target.powers, target.config_set)
        if meal_power_has_type(power.meal_power)
    ]
    return max(places, default=1)


def _type_constraints(
    ingredients: Sequence[Ingredient],
    target: Target,
) -> list[Constraint]:
    constraints = []
    ranked = target.types_by_place[: _ranked_depth(target)]
    for greater, lesser in zip(ranked, ranked[1:]):
        constraints.append(
            Constraint(
                _row(ingredients, lambda i, g=greater, l=lesser: i.type_vector[g] - i.type_vector[l]),
                lower_bound=_tie_bound(greater, lesser),
                name=f"type_{greater.name}_over_{lesser.name}",
            )
        )
    last = ranked[-1]
    others = [t for t in PowerType if t not in ranked]
    for power_type in others:
        constraints.append(
            Constraint(
                _row(ingredients, lambda i, t=power_type: i.type_vector[last] - i.type_vector[t]),
                lower_bound=_tie_bound(last, power_type),
                name=f"type_{last.name}_over_{power_type.name}",
            )
        )

    first = ranked[0]
    if target.first_type_gte is not None or target.first_type_lte is not None:
        constraints.append(
            Constraint(
                _row(ingredients, lambda i: i.type_vector[first]),
                lower_bound=target.first_type_gte,
                upper_bound=target.first_type_lte,
                name="type_first_level",
            )
        )
    if target.third_type_gte is not None:
        for power_type in ranked[1:3]:
            constraints.append(
                Constraint(
                    _row(ingredients, lambda i, t=power_type: i.type_vector[t]),
                    lower_bound=target.third_type_gte,
                    name=f"type_{power_type.name}_level",
                )
            )
    if target.diff70:
        # The runner-up is either pinned or the largest of the rest
        seconds = ranked[1:2] or others
        constraints.extend(
            Constraint(
                _row(
                    ingredients,
                    lambda i, t=second: i.type_vector[first]
                    - DIFF70_SECOND_FACTOR * i.type_vector[t],
                ),
                lower_bound=DIFF70_MARGIN,
                name=f"type_diff70_{second.name}",
            )
            for second in seconds
        )
    return constraints


def build_model(
    target: Target,
    catalog: Iterable[Ingredient],
    config: Config | None = None,
) -> Model:
    """Linear model whose feasible points realize ``target``.

    Parameters
    ----------
    target : Target
        Placement to realize.
    catalog : iterable of Ingredient
        Ingredients; one integer variable per ingredient name.
    config : Config, optional
        Capacity limits; the cached configuration when omitted.

    Returns
    -------
    Model
        Count limits (herba, fillings, condiments, pieces), flavor and
        meal power ordering, type ordering and level thresholds. The
        objective is the weighted recipe size.
    """
    config = config or get_cached_config()
    capacity = config.capacity
    ingredients = list(catalog)

    constraints = [
        Constraint(
            _row(ingredients, lambda i: 1 if i.is_herba else 0),
            lower_bound=target.num_herba,
            upper_bound=target.num_herba,
            name="herba",
        ),
        Constraint(
            _row(ingredients, lambda i: 1 if i.is_filling else 0),
            lower_bound=1,
            upper_bound=capacity.max_fillings,
            name="fillings",
        ),
        Constraint(
            _row(ingredients, lambda i: 1 if i.is_condiment else 0),
            lower_bound=1,
            upper_bound=capacity.max_condiments,
            name="condiments",
        ),
    ]
    constraints.extend(
        Constraint(
            {filling.name: filling.pieces},
            upper_bound=capacity.max_pieces,
            name=f"pieces_{filling.name}",
        )
        for filling in ingredients
        if filling.is_filling
    )
    if target.flavor_profile is not None:
        constraints.extend(_flavor_constraints(ingredients, target.flavor_profile))
    constraints.extend(_meal_power_constraints(ingredients, target))
    constraints.extend(_type_constraints(ingredients, target))

    return Model(
        variables=[i.name for i in ingredients],
        objective={
            i.name: FILLING_COST if i.is_filling else CONDIMENT_COST
            for i in ingredients
        },
        constraints=constraints,
    )


def _recipe_from_solution(
    solution: Solution,
    catalog: IngredientCatalog,
) -> Recipe:
    fillings = []
    condiments = []
    for name, count in solution.variables.items():
        ingredient = catalog.get(name)
        if ingredient is None or count <= 0:
            continue
        bucket = fillings if ingredient.is_filling else condiments
        bucket.extend([ingredient] * int(count))
    ingredients = fillings + condiments
    meal_power_vector, type_vector, flavor_vector = mix_ingredients(ingredients)
    return Recipe(
        fillings=fillings,
        condiments=condiments,
        powers=get_powers_for_ingredients(ingredients),
        meal_power_vector=meal_power_vector,
        type_vector=type_vector,
        flavor_vector=flavor_vector,
    )


def make_recipe_for_powers(
    powers: Sequence[Power],
    solve: Solver | None = None,
    catalog: IngredientCatalog | None = None,
    config: Config | None = None,
) -> Recipe | None:
    """Cheapest recipe realizing every power in ``powers``.

    Parameters
    ----------
    powers : sequence of Power
        Requested powers (one to three).
    solve : callable, optional
        ``Model -> Solution``; `lp_solver.solve_with_pulp` when omitted.
    catalog : IngredientCatalog, optional
        Ingredients; the bundled catalog when omitted.
    config : Config, optional
        Tunables; the cached configuration when omitted.

    Returns
    -------
    Recipe or None
        ``None`` for an invalid request or when no solution realizes
        the request.
    """
    if not requested_powers_valid(powers):
        return None
    config = config or get_cached_config()
    if catalog is None:
        catalog = get_default_catalog()
    if solve is None:
        from lp_solver import solve_with_pulp

        def solve(model):
            return solve_with_pulp(model, time_limit=config.lp.time_limit_seconds)

    targets = select_initial_targets(powers, avoid_herba=config.lp.avoid_herba)
    logger.info("Solving %d targets for %s", len(targets), ", ".join(map(str, powers)))

    solutions = []
    for index, target in enumerate(targets):
        solution = solve(build_model(target, catalog, config))
        if solution.feasible:
            solutions.append((solution.objective_value or 0, index, solution))

    # Lowest objective first; generation order breaks ties
    for _score, _index, solution in sorted(solutions, key=lambda s: (s[0], s[1])):
        recipe = _recipe_from_solution(solution, catalog)
        if all(
            any(powers_match(actual, wanted) for actual in recipe.powers)
            for wanted in powers
        ):
            return recipe
        logger.debug("Solution %s misses the request", solution.variables)
    return None
