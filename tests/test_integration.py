"""Integration tests for the command-line entry point.

Runs ``main()`` end to end against a small catalog file:
- single-power search (find)
- evaluating an ingredient list
- listing and exporting the catalog
- malformed power strings
"""

import json

import pytest

from main import main


@pytest.fixture
def catalog_file(tmp_path, sample_catalog):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps([ingredient.to_dict() for ingredient in sample_catalog]),
        encoding="utf-8",
    )
    return str(path)


class TestFind:
    """main() with the find subcommand."""

    def test_encounter_fire_2(self, catalog_file, capsys) -> None:
        main(["--catalog", catalog_file, "find", "Encounter:Fire:2"])
        output = capsys.readouterr().out
        assert "LV 2 ENCOUNTER FIRE" in output
        assert "Fillings:   Chorizo" in output
        assert "Condiments: Salt" in output

    def test_sparkling_uses_two_herba(self, catalog_file, capsys) -> None:
        main(["--catalog", catalog_file, "find", "sparkling:ground:3"])
        output = capsys.readouterr().out
        assert "Herba mystica: 2" in output
        assert "Lv 3 Sparkling Ground" in output

    def test_invalid_level_reported(self, catalog_file, capsys) -> None:
        main(["--catalog", catalog_file, "find", "Encounter:Fire:4"])
        output = capsys.readouterr().out
        assert "cannot be made" in output
        assert "No recipe found." in output

    def test_budget_declined(self, catalog_file, capsys, monkeypatch) -> None:
        """Budget runs out; answering no keeps the partial result."""
        monkeypatch.setattr("builtins.input", lambda _: "n")
        main(
            [
                "--catalog",
                catalog_file,
                "find",
                "Encounter:Fire:2",
                "--max-steps",
                "1",
            ]
        )
        output = capsys.readouterr().out
        assert "Search stopped after 1 steps." in output

    def test_budget_retry_finds_recipe(self, catalog_file, capsys, monkeypatch) -> None:
        monkeypatch.setattr("builtins.input", lambda _: "y")
        main(
            [
                "--catalog",
                catalog_file,
                "find",
                "Encounter:Fire:2",
                "--max-steps",
                "1",
            ]
        )
        assert "Condiments: Salt" in capsys.readouterr().out

    def test_malformed_power_exits(self, catalog_file, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--catalog", catalog_file, "find", "Encounter:Wood:2"])
        assert excinfo.value.code == 2
        assert "Unknown type" in capsys.readouterr().err


class TestEvaluate:
    """main() with the evaluate subcommand."""

    def test_powers_of_list(self, catalog_file, capsys) -> None:
        main(["--catalog", catalog_file, "evaluate", "chorizo", "salt"])
        output = capsys.readouterr().out
        assert "EVALUATION" in output
        assert "1. Lv 2 Encounter Fire" in output

    def test_unknown_name_suggests(self, catalog_file, capsys) -> None:
        main(["--catalog", catalog_file, "evaluate", "Chorizzo"])
        output = capsys.readouterr().out
        assert "did you mean: Chorizo" in output
        assert "EVALUATION" not in output


class TestList:
    """main() with the list subcommand."""

    def test_export(self, catalog_file, tmp_path, capsys) -> None:
        out_path = tmp_path / "export.json"
        main(["--catalog", catalog_file, "list", "--export", str(out_path)])
        output = capsys.readouterr().out
        assert "5 ingredient(s)" in output
        assert "Catalog written to" in output
        exported = json.loads(out_path.read_text(encoding="utf-8"))
        assert [entry["Name"] for entry in exported][:2] == ["Herba Mystica", "Chorizo"]


class TestMulti:
    """main() with the multi subcommand (needs the CBC solver)."""

    def test_single_power(self, catalog_file, capsys) -> None:
        pytest.importorskip("pulp")
        main(["--catalog", catalog_file, "multi", "Encounter:Fire:2"])
        output = capsys.readouterr().out
        assert "Lv 2 Encounter Fire" in output or "No recipe found." in output

    def test_malformed_power_exits(self, catalog_file) -> None:
        with pytest.raises(SystemExit):
            main(["--catalog", catalog_file, "multi", "Encounter"])


class TestLogging:
    """main() writes log records to --log-file."""

    def test_catalog_summary_logged(self, catalog_file, tmp_path) -> None:
        log_path = tmp_path / "run.log"
        main(["-v", "--log-file", str(log_path), "--catalog", catalog_file, "list"])
        assert "No catalog issues found in 5 ingredients" in log_path.read_text(
            encoding="utf-8"
        )

    def test_search_summary_at_debug(self, catalog_file, tmp_path) -> None:
        """-vv logs one summary line for the search."""
        log_path = tmp_path / "debug.log"
        main(
            [
                "-vv",
                "--log-file",
                str(log_path),
                "--catalog",
                catalog_file,
                "find",
                "Encounter:Fire:2",
            ]
        )
        lines = [
            line
            for line in log_path.read_text(encoding="utf-8").splitlines()
            if "Search for Lv 2 Encounter Fire" in line
        ]
        assert len(lines) == 1
        assert "2 steps" in lines[0]
