"""Command-line interface for the sandwich recipe planner.

Wires together loading the catalog, collecting the requested power(s),
running the search, and printing the result. Provides subcommands for
single-power search, multi-power (LP) search, evaluating an ingredient
list, and listing the catalog.

Exports
-------
cmd_find
cmd_multi
cmd_evaluate
cmd_list
main

Notes
-----
Use `python main.py find Encounter:Fire:2` to run a search from the shell.
"""

# Early config path detection - must happen before the first config load
import sys


def _detect_config_path() -> str | None:
    """Extract --config or -c from sys.argv before full parsing."""
    args = sys.argv[1:]
    for i, arg in enumerate(args):
        if arg in ("--config", "-c") and i + 1 < len(args):
            return args[i + 1]
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
    return None


_early_config = _detect_config_path()
if _early_config:
    from config import set_config_path

    set_config_path(_early_config)


from dataclasses import replace

from builder import (
    SearchStatus,
    search_recipe,
)
from config import (
    get_cached_config,
    reload_config,
    set_config_path,
)
from interface.cli import (
    build_parser,
)
from interface.persistence import (
    load_catalog,
    save_ingredient_catalog,
)
from interface.prompts import (
    prompt_power,
    prompt_yes_no,
)
from interface.render import (
    display_catalog,
    display_recipe,
)
from logs.logging_utils import (
    setup_logging,
)
from models.recipe import (
    Recipe,
    power_from_string,
)
from multi_power import (
    make_recipe_for_powers,
)
from powers import (
    get_powers_for_ingredients,
    mix_ingredients,
)


def _parse_powers(
    parser,
    texts,
):
    """Parse ``MealPower:Type:Level`` strings or exit with a usage error."""
    try:
        return [power_from_string(text) for text in texts]
    except ValueError as exc:
        parser.error(str(exc))


def cmd_find(
    args,
    parser=None,
) -> None:
    """Execute the ``find`` subcommand.

    Parses (or prompts for) one power, runs the recursive search, and
    prints the recipe. When the step budget runs out first, offers to
    retry without a budget.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    parser : argparse.ArgumentParser, optional
        Used to report malformed power strings.
    """
    parser = parser or build_parser()
    config = get_cached_config()
    catalog = load_catalog(args.catalog)

    if args.power:
        (power,) = _parse_powers(parser, [args.power])
    else:
        power = prompt_power()

    if args.max_steps is not None:
        config = replace(config, search=replace(config.search, max_steps=args.max_steps))

    outcome = search_recipe(power, catalog, config)
    if outcome.status is SearchStatus.BUDGET_EXHAUSTED and prompt_yes_no(
        f"No recipe within {config.search.max_steps} steps. Search without a limit?",
        default=False,
    ):
        config = replace(config, search=replace(config.search, max_steps=None))
        outcome = search_recipe(power, catalog, config)

    notices = []
    if outcome.status is SearchStatus.INVALID_REQUEST:
        notices.append(f"{power} cannot be made.")
    elif outcome.status is SearchStatus.BUDGET_EXHAUSTED:
        notices.append(f"Search stopped after {outcome.steps} steps.")
    elif outcome.status is SearchStatus.EXHAUSTED:
        notices.append(f"No ingredient combination makes {power}.")

    display_recipe(
        outcome.recipe,
        title=str(power).upper(),
        show_vectors=config.display.show_vectors,
        notices=notices,
    )


def cmd_multi(
    args,
    parser=None,
) -> None:
    """Execute the ``multi`` subcommand (linear program mode).

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    parser : argparse.ArgumentParser, optional
        Used to report malformed power strings.
    """
    parser = parser or build_parser()
    config = get_cached_config()
    catalog = load_catalog(args.catalog)
    powers = _parse_powers(parser, args.powers)

    recipe = make_recipe_for_powers(powers, catalog=catalog, config=config)
    display_recipe(
        recipe,
        title=" + ".join(str(p) for p in powers).upper(),
        show_vectors=config.display.show_vectors,
    )


def cmd_evaluate(
    args,
) -> None:
    """Execute the ``evaluate`` subcommand.

    Looks up each named ingredient (suggesting close names for typos)
    and prints the powers the list produces.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    """
    config = get_cached_config()
    catalog = load_catalog(args.catalog)

    ingredients = []
    missing = False
    for name in args.ingredients:
        ingredient = catalog.get(name)
        if ingredient is None:
            missing = True
            suggestions = catalog.suggest(name)
            if suggestions:
                print(f"Error: '{name}' not found (did you mean: {', '.join(suggestions)})")
            else:
                print(f"Error: '{name}' not found in catalog.")
            continue
        ingredients.append(ingredient)
    if missing:
        return

    meal_power_vector, type_vector, flavor_vector = mix_ingredients(ingredients)
    recipe = Recipe(
        fillings=[i for i in ingredients if i.is_filling],
        condiments=[i for i in ingredients if i.is_condiment],
        powers=get_powers_for_ingredients(ingredients),
        meal_power_vector=meal_power_vector,
        type_vector=type_vector,
        flavor_vector=flavor_vector,
    )
    display_recipe(
        recipe,
        title="EVALUATION",
        show_vectors=config.display.show_vectors,
    )


def cmd_list(
    args,
) -> None:
    """Execute the ``list`` subcommand.

    Prints the catalog and optionally exports it to a JSON file.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments.
    """
    catalog = load_catalog(args.catalog)
    display_catalog(catalog, role=args.role)
    if args.export:
        save_ingredient_catalog(
            [ingredient.to_dict() for ingredient in catalog],
            args.export,
        )
        print(f"Catalog written to {args.export}")


def main(
    argv=None,
):
    """CLI entry point.

    Parses args, configures logging, and dispatches to the selected subcommand.
    """

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    # Normally applied at import time (see top); argv passed in directly
    # still needs it
    if args.config:
        set_config_path(args.config)
        reload_config()

    # No subcommand: interactive single-power search
    command = args.cmd or "find"
    if command == "find":
        if args.cmd is None:
            args.power = None
            args.max_steps = None
        cmd_find(args, parser)
    elif command == "multi":
        cmd_multi(args, parser)
    elif command == "evaluate":
        cmd_evaluate(args)
    elif command == "list":
        cmd_list(args)
    else:
        parser.error(f"Unknown command: {command}")


if __name__ == "__main__":
    main()
