"""Tests for objcov report command."""

from __future__ import annotations

import json
import os
import subprocess
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from objcov.cli.main import cli
from objcov.config import loader as loader_module

runner = CliRunner()

GCOV_ADD = """\
Function 'static_add'
Lines executed:100.00% of 2

Function 'my_add'
Lines executed:100.00% of 5

File 'src/static.h'
Lines executed:50.00% of 4

File 'src/add.c'
Lines executed:100.00% of 5
"""

GCOV_MINUS = """\
Function 'my_minus'
Lines executed:80.00% of 5

File 'src/minus.c'
Lines executed:80.00% of 5
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    for key in [k for k in os.environ if k.startswith("OBJCOV__")]:
        monkeypatch.delenv(key)
    monkeypatch.setattr(loader_module, "GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    yield


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    (root / "add.c").write_text("")
    (root / "minus.c").write_text("")
    return root


def _fake_gcov(outputs: dict[str, str]):
    """subprocess.run replacement keyed by the object file name (last argv)."""

    def run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:  # noqa: ARG001
        name = Path(cmd[-1]).name
        if name not in outputs:
            return subprocess.CompletedProcess(args=cmd, returncode=1, stdout="")
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout=outputs[name])

    return run


class TestReportCommand:
    """objcov report command tests."""

    def test_given_no_root_when_report_then_usage_error(self) -> None:
        result = runner.invoke(cli, ["report"])
        assert result.exit_code == 2
        assert "must be specified" in result.output

    def test_given_missing_root_when_report_then_usage_error(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["report", str(tmp_path / "nope")])
        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_given_tree_when_report_then_prints_summary(self, source_tree: Path) -> None:
        # Given
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        # When
        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["report", str(source_tree), "--file-detail"])

        # Then
        assert result.exit_code == 0, result.output
        assert "* Line (file): 9 out of 10 (90.00%)" in result.output
        assert "* Func:        3 out of 3 (100.00%)" in result.output
        assert "File Detail" in result.output
        assert "static.h" not in result.output

    def test_given_include_header_when_report_then_header_rows_counted(
        self, source_tree: Path
    ) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(
                cli, ["report", str(source_tree), "--include-header", "--file-detail"]
            )

        assert result.exit_code == 0, result.output
        assert "* Line (file): 11 out of 14 (78.57%)" in result.output
        assert "- exclude header:   False" in result.output

    def test_given_keywords_when_report_then_filters_echoed(self, source_tree: Path) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(
                cli,
                [
                    "report",
                    str(source_tree),
                    "--file-keyword",
                    "ADD",
                    "--func-keyword",
                    "my",
                    "--case-sensitive",
                ],
            )

        assert result.exit_code == 0, result.output
        assert "- ignore case:      False" in result.output
        assert "* Line (file): 0 out of 0 (undefined)" in result.output

    def test_given_json_flag_when_report_then_structured_output(self, source_tree: Path) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["report", str(source_tree), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["file_coverage"] == {"covered": 2, "total": 2, "percent": 100.0}
        assert [row["object"] for row in data["functions"]] == ["add.c", "add.c", "minus.c"]
        assert data["failures"] == []

    def test_given_gcov_failure_when_report_then_object_listed_as_failed(
        self, source_tree: Path
    ) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["report", str(source_tree)])

        assert result.exit_code == 0, result.output
        assert ">>> Failed objects:" in result.output
        assert "- minus.c: gcov exited with status 1 for minus.c" in result.output

    def test_given_strict_and_bad_output_when_report_then_exits_with_error(
        self, source_tree: Path
    ) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": "File 'src/minus.c'\n"})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["report", str(source_tree), "--strict"])

        assert result.exit_code == 1
        assert "Unexpected gcov output format for minus.c" in result.output

    def test_given_timeout_option_when_report_then_passed_to_gcov(
        self, source_tree: Path
    ) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake) as run:
            result = runner.invoke(cli, ["report", str(source_tree), "--timeout", "3"])

        assert result.exit_code == 0, result.output
        assert {call.kwargs["timeout"] for call in run.call_args_list} == {3.0}


class TestReportStdout:
    """stdout carries only the report; logs go to stderr."""

    def test_given_verbose_json_when_report_then_stdout_is_pure_json(
        self, source_tree: Path
    ) -> None:
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["-v", "report", str(source_tree), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["func_coverage"]["covered"] == 3
        assert "report_start" in result.stderr

    def test_given_info_level_config_when_report_then_stdout_is_report_text(
        self, source_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OBJCOV__LOGGING__LEVEL", "INFO")
        fake = _fake_gcov({"add.c": GCOV_ADD, "minus.c": GCOV_MINUS})

        with patch("objcov.coverage.tool.subprocess.run", side_effect=fake):
            result = runner.invoke(cli, ["report", str(source_tree)])

        assert result.exit_code == 0, result.output
        assert result.stdout.startswith("========-------- Coverage Report --------========")
        assert "object_parsed" not in result.stdout
        assert "object_parsed" in result.stderr
