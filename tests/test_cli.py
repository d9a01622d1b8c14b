from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from unitharness import __version__
from unitharness.cli.main import cli

PASSING_CASES = """
from unitharness import expect, require, testcase


@testcase("Cli", "adds")
def adds():
    require.eq(1 + 1, 2)


@testcase("Cli", "compares")
def compares():
    expect.strcaseeq("Hello", "hello")
"""

FAILING_CASES = """
from unitharness import expect, require, testcase


@testcase("Broken", "soft")
def soft():
    expect.eq(1, 2)


@testcase("Broken", "crash")
def crash():
    raise RuntimeError("boom")
"""


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def test_cli_help_short_flag() -> None:
    result = CliRunner().invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "run" in result.output
    assert "list" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"unitharness {__version__}"


def test_cli_run_passing_module(workdir: Path) -> None:
    cases = _write(workdir / "passing_cases.py", PASSING_CASES)
    result = CliRunner().invoke(cli, ["run", str(cases), "--no-color"])
    assert result.exit_code == 0, result.output
    assert "[1/2] Cli.adds -> PASSED" in result.output
    assert "Summary: total=2 passed=2" in result.output


def test_cli_run_failing_module_exits_nonzero(workdir: Path) -> None:
    cases = _write(workdir / "failing_cases.py", FAILING_CASES)
    result = CliRunner().invoke(cli, ["run", str(cases), "--no-color"])
    assert result.exit_code == 1
    assert "Broken.soft -> FAILED" in result.output
    assert "Broken.crash -> CRASHED" in result.output
    assert "RuntimeError: boom" in result.output


def test_cli_run_json_report(workdir: Path) -> None:
    cases = _write(workdir / "json_cases.py", FAILING_CASES)
    report_path = workdir / "out" / "report.json"
    result = CliRunner().invoke(
        cli,
        ["run", str(cases), "--report", "json", "--report-path", str(report_path)],
    )
    assert result.exit_code == 1
    assert "JSON report written to" in result.output
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["summary"]["soft_failed"] == 1
    assert payload["summary"]["crashed"] == 1


def test_cli_run_uses_config_file(workdir: Path) -> None:
    _write(workdir / "config_cases.py", PASSING_CASES)
    config = _write(
        workdir / "harness.yaml",
        """
        modules: [config_cases.py]
        report: json
        report_path: config-report.json
        """,
    )
    result = CliRunner().invoke(cli, ["run", "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert (workdir / "config-report.json").exists()


def test_cli_picks_up_default_config(workdir: Path) -> None:
    _write(workdir / "default_cases.py", PASSING_CASES)
    _write(workdir / "unitharness.yaml", "modules: [default_cases.py]\ncolor: false\n")
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["Cli.adds", "Cli.compares"]


def test_cli_list_prints_identifiers(workdir: Path) -> None:
    cases = _write(workdir / "listed_cases.py", FAILING_CASES)
    result = CliRunner().invoke(cli, ["list", str(cases)])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["Broken.soft", "Broken.crash"]


def test_cli_reports_missing_module(workdir: Path) -> None:
    result = CliRunner().invoke(cli, ["run", str(workdir / "missing.py")])
    assert result.exit_code == 1
    assert "Case module not found" in result.output


def test_cli_reports_invalid_config(workdir: Path) -> None:
    config = _write(workdir / "bad.yaml", "report: html\n")
    result = CliRunner().invoke(cli, ["run", "--config", str(config)])
    assert result.exit_code == 1
    assert "Config schema validation failed" in result.output
