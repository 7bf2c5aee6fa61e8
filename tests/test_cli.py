"""Tests for CLI argument parser."""

import pytest

from interface.cli import build_parser


class TestBuildParser:
    """Tests for build_parser() argument parsing."""

    def test_find_subcommand_defaults(self) -> None:
        """find without a power leaves it for the prompts."""
        args = build_parser().parse_args(["find"])
        assert args.cmd == "find"
        assert args.power is None
        assert args.max_steps is None

    def test_find_with_power_and_budget(self) -> None:
        args = build_parser().parse_args(
            ["find", "Encounter:Fire:2", "--max-steps", "50"]
        )
        assert args.power == "Encounter:Fire:2"
        assert args.max_steps == 50

    def test_multi_requires_power(self) -> None:
        """multi without powers fails."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["multi"])

    def test_multi_collects_powers(self) -> None:
        args = build_parser().parse_args(["multi", "Encounter:Fire:2", "Raid:Fire:1"])
        assert args.cmd == "multi"
        assert args.powers == ["Encounter:Fire:2", "Raid:Fire:1"]

    def test_evaluate_collects_names(self) -> None:
        args = build_parser().parse_args(["evaluate", "Chorizo", "Ground Meat"])
        assert args.ingredients == ["Chorizo", "Ground Meat"]

    def test_list_flags(self) -> None:
        args = build_parser().parse_args(
            ["list", "--role", "condiment", "--export", "out.json"]
        )
        assert args.role == "condiment"
        assert args.export == "out.json"

    def test_list_rejects_unknown_role(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["list", "--role", "bread"])

    def test_verbose_counting(self) -> None:
        """-v = 1, -vvv = 3."""
        args_v = build_parser().parse_args(["-v", "list"])
        assert args_v.verbose == 1

        args_vvv = build_parser().parse_args(["-vvv", "list"])
        assert args_vvv.verbose == 3

    def test_config_and_catalog_flags(self) -> None:
        """--config and --catalog paths captured."""
        args = build_parser().parse_args(
            ["--config", "my_config.yml", "--catalog", "mine.json", "list"]
        )
        assert args.config == "my_config.yml"
        assert args.catalog == "mine.json"

    def test_no_subcommand_defaults_none(self) -> None:
        """No subcommand → cmd=None."""
        args = build_parser().parse_args([])
        assert args.cmd is None
        assert args.catalog is None

    def test_log_file_flag(self) -> None:
        args = build_parser().parse_args(["--log-file", "run.log", "list"])
        assert args.log_file == "run.log"
