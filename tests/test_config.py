from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from unitharness.config import HarnessConfig, find_config, load_config


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def test_load_config_reads_all_keys(tmp_path: Path) -> None:
    config_path = _write(
        tmp_path / "unitharness.yaml",
        """
        modules:
          - cases/math_cases.py
          - my_package.cases
        report: json
        report_path: out/report.json
        color: false
        verbose: true
        """,
    )
    config = load_config(config_path)
    assert config.modules == (str(tmp_path.resolve() / "cases/math_cases.py"), "my_package.cases")
    assert config.report == "json"
    assert config.report_path == "out/report.json"
    assert config.color is False
    assert config.verbose is True
    assert config.source == config_path.resolve()


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path / "empty.yaml", ""))
    assert config.modules == ()
    assert config.report == "terminal"
    assert config.color is True


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "bad.yaml", "filter: Math.*\n")
    with pytest.raises(ValueError, match="Config schema validation failed"):
        load_config(config_path)


def test_invalid_values_list_their_paths(tmp_path: Path) -> None:
    config_path = _write(tmp_path / "bad.yaml", "report: html\nmodules: [1]\n")
    with pytest.raises(ValueError) as info:
        load_config(config_path)
    assert "report:" in str(info.value)
    assert "modules/0:" in str(info.value)


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="mapping"):
        load_config(_write(tmp_path / "list.yaml", "- a\n- b\n"))


def test_find_config(tmp_path: Path) -> None:
    assert find_config(None, cwd=tmp_path) is None
    _write(tmp_path / "unitharness.yaml", "report: terminal\n")
    assert find_config(None, cwd=tmp_path) == tmp_path / "unitharness.yaml"
    assert find_config("other.yaml", cwd=tmp_path) == Path("other.yaml")


def test_merged_layers_command_line_values() -> None:
    base = HarnessConfig(modules=("a",), report="json", report_path="r.json", color=True)
    merged = base.merged(modules=("a", "b"), report=None, color=False, verbose=True)
    assert merged.modules == ("a", "b")
    assert merged.report == "json"
    assert merged.report_path == "r.json"
    assert merged.color is False
    assert merged.verbose is True
    assert base.merged() == base
