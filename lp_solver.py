"""PuLP adapter for multi-power models.

Exports
-------
solve_with_pulp
"""

import logging

import pulp

from multi_power import (
    Model,
    Solution,
)

logger = logging.getLogger(__name__)


def _bounds_hold(
    lower: float | None,
    upper: float | None,
) -> bool:
    # A row without variables always sums to zero
    return (lower is None or lower <= 0) and (upper is None or upper >= 0)


def solve_with_pulp(
    model: Model,
    time_limit: float | None = None,
) -> Solution:
    """Solve ``model`` with CBC over non-negative integer counts.

    Parameters
    ----------
    model : Model
        Variables, minimized objective and linear constraints.
    time_limit : float, optional
        CBC time limit in seconds.

    Returns
    -------
    Solution
        ``"optimal"`` with the non-zero counts and objective value, or
        ``"infeasible"`` (any non-optimal CBC status) with no variables.
    """
    problem = pulp.LpProblem("SandwichRecipe", pulp.LpMinimize)
    # Ingredient names may hold characters PuLP rejects; use positional names
    variables = {
        name: pulp.LpVariable(f"x{index}", lowBound=0, cat="Integer")
        for index, name in enumerate(model.variables)
    }

    problem += pulp.lpSum(
        coefficient * variables[name] for name, coefficient in model.objective.items()
    )

    for index, constraint in enumerate(model.constraints):
        terms = [
            coefficient * variables[name]
            for name, coefficient in constraint.coefficients.items()
            if coefficient
        ]
        if not terms:
            if not _bounds_hold(constraint.lower_bound, constraint.upper_bound):
                logger.debug("Constraint %s cannot hold", constraint.name or index)
                return Solution("infeasible")
            continue
        expression = pulp.lpSum(terms)
        if constraint.lower_bound is not None:
            problem += expression >= constraint.lower_bound, f"c{index}_lower"
        if constraint.upper_bound is not None:
            problem += expression <= constraint.upper_bound, f"c{index}_upper"

    status = problem.solve(pulp.PULP_CBC_CMD(msg=0, timeLimit=time_limit))
    if status != pulp.LpStatusOptimal:
        logger.debug("LP solver status: %s", pulp.LpStatus[status])
        return Solution("infeasible")

    counts = {}
    for name, variable in variables.items():
        count = int(round(variable.varValue or 0))
        if count > 0:
            counts[name] = count
    return Solution(
        "optimal",
        counts,
        pulp.value(problem.objective),
    )
