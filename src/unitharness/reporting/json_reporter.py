"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import Any, Dict

import click
from jsonschema import validate

from unitharness.core.results import CaseOutcome, RunReport

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results to a JSON file validated against the schema."""

    def __init__(self, path: str) -> None:
        self._path = pathlib.Path(path)
        self._records: list[Dict[str, Any]] = []

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def on_start(self, total: int) -> None:
        self._records.clear()

    def on_case_result(self, outcome: CaseOutcome, index: int, total: int) -> None:
        self._records.append(outcome_to_dict(outcome))

    def on_complete(self, report: RunReport) -> None:
        payload = build_payload(report, self._records)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def build_payload(report: RunReport, records: list[Dict[str, Any]] | None = None) -> Dict[str, Any]:
    """Assemble the report document and validate it against the schema."""

    if records is None:
        records = [outcome_to_dict(outcome) for outcome in report.outcomes]
    payload = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
        "summary": _build_summary(report),
        "cases": records,
    }
    validate(instance=payload, schema=JSON_SCHEMA_V1)
    return payload


def _build_summary(report: RunReport) -> Dict[str, Any]:
    return {
        "total": report.total,
        "passed": report.passed,
        "soft_failed": report.soft_failed,
        "hard_failed": report.hard_failed,
        "crashed": report.crashed,
        "exit_code": report.exit_code,
        "duration_s": report.duration_s,
    }


def outcome_to_dict(outcome: CaseOutcome) -> Dict[str, Any]:
    case = outcome.case
    record: Dict[str, Any] = {
        "id": case.identifier(),
        "suite": case.suite,
        "name": case.name,
        "status": outcome.status.value,
        "duration_ms": outcome.duration_s * 1000,
    }
    if outcome.message is not None:
        record["message"] = outcome.message
    if outcome.location:
        record["location"] = outcome.location
    if outcome.traceback:
        record["traceback"] = outcome.traceback
    return record
