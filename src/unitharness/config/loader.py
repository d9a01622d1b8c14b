"""YAML loader and validation for harness configuration files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from .models import REPORT_FORMATS, HarnessConfig

DEFAULT_CONFIG_NAME = "unitharness.yaml"

CONFIG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "unitharness configuration",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "modules": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "report": {"type": "string", "enum": list(REPORT_FORMATS)},
        "report_path": {"type": "string", "minLength": 1},
        "color": {"type": "boolean"},
        "verbose": {"type": "boolean"},
    },
}

_validator = Draft7Validator(CONFIG_SCHEMA)


def load_config(path: str | Path) -> HarnessConfig:
    """Load and validate a configuration file."""

    config_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Config file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Config schema validation failed: {messages}")
    modules = tuple(_resolve_module(item, config_path.parent) for item in raw.get("modules", []))
    return HarnessConfig(
        modules=modules,
        report=raw.get("report", "terminal"),
        report_path=raw.get("report_path"),
        color=raw.get("color", True),
        verbose=raw.get("verbose", False),
        source=config_path,
    )


def find_config(explicit: Optional[str] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the config path to use, if any."""

    if explicit:
        return Path(explicit)
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def _resolve_module(item: Any, base: Path) -> str:
    text = str(item).strip()
    if text.endswith(".py") and not Path(text).is_absolute():
        return str(base / text)
    return text
