"""Command-line argument builder (parser only)."""

import argparse


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser with subcommands (``find``, ``multi``,
        ``evaluate``, ``list``) and global options (verbosity, config
        file, catalog file).
    """
    parser = argparse.ArgumentParser(
        prog="sandwich",
        description="Sandwich recipe planner",
    )
    subparsers = parser.add_subparsers(
        dest="cmd",
        required=False,
    )

    # Global -v/--verbose for all commands (counting flag)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v for INFO, -vv for DEBUG, -vvv includes the LP solver",
    )
    # Read early by main._detect_config_path; declared here for --help
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="YAML config file (default: config.default.yml)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write log records to this file",
    )
    parser.add_argument(
        "--catalog",
        metavar="PATH",
        help="Ingredient catalog JSON (default: data/ingredients.json)",
    )

    # Subcommand: one power, recursive search
    find_parser = subparsers.add_parser(
        "find",
        help="Find a recipe for one power (prompts for missing parts)",
    )
    find_parser.add_argument(
        "power",
        nargs="?",
        help="Power as MealPower:Type:Level, e.g. Encounter:Fire:2",
    )
    find_parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort after this many search states",
    )

    # Subcommand: several powers, linear program mode
    multi_parser = subparsers.add_parser(
        "multi",
        help="Find a recipe for up to three powers (LP mode)",
    )
    multi_parser.add_argument(
        "powers",
        nargs="+",
        help="Powers as MealPower:Type:Level",
    )

    # Subcommand: powers of a given ingredient list
    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Show the powers an ingredient list produces",
    )
    evaluate_parser.add_argument(
        "ingredients",
        nargs="+",
        help="Ingredient names (quote names with spaces)",
    )

    # Subcommand: show (or export) the catalog
    list_parser = subparsers.add_parser(
        "list",
        help="List catalog ingredients",
    )
    list_parser.add_argument(
        "--role",
        choices=["filling", "condiment"],
        help="Only show one role",
    )
    list_parser.add_argument(
        "--export",
        metavar="PATH",
        help="Write the (deduplicated) catalog to a JSON file",
    )

    return parser
