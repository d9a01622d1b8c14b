"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time

import click
from colorama import just_fix_windows_console

from unitharness.core.models import CaseStatus
from unitharness.core.results import CaseOutcome, RunReport

from .base import Reporter


STATUS_COLORS = {
    CaseStatus.PASSED: "green",
    CaseStatus.SOFT_FAILED: "red",
    CaseStatus.HARD_FAILED: "magenta",
    CaseStatus.CRASHED: "yellow",
}

STATUS_LABELS = {
    CaseStatus.PASSED: "PASSED",
    CaseStatus.SOFT_FAILED: "FAILED",
    CaseStatus.HARD_FAILED: "FATAL",
    CaseStatus.CRASHED: "CRASHED",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True, show_tracebacks: bool = True) -> None:
        self._use_color = use_color
        self._show_tracebacks = show_tracebacks
        self._start_time = 0.0
        self._failures: list[tuple[int, CaseOutcome]] = []

    def on_start(self, total: int) -> None:
        if self._use_color:
            just_fix_windows_console()
        self._start_time = time.perf_counter()
        self._failures.clear()
        click.echo(self._styled(f"Running {total} test case(s)", color="cyan"))

    def on_case_result(self, outcome: CaseOutcome, index: int, total: int) -> None:
        ms = outcome.duration_s * 1000
        label = self._styled(STATUS_LABELS[outcome.status], color=STATUS_COLORS[outcome.status])
        click.echo(f"[{index}/{total}] {outcome.case.identifier()} -> {label} ({ms:.2f} ms)")
        if not outcome.passed:
            self._failures.append((index, outcome))

    def on_complete(self, report: RunReport) -> None:
        duration = time.perf_counter() - self._start_time
        click.echo(
            self._styled(
                f"Summary: total={report.total} passed={report.passed} "
                f"soft_failed={report.soft_failed} hard_failed={report.hard_failed} "
                f"crashed={report.crashed} duration={duration:.2f}s",
                color="cyan",
            )
        )
        if self._failures:
            click.echo(self._styled("Failure details:", color="red"))
            for index, outcome in self._failures:
                click.echo(f"  [{index}] {outcome.case.identifier()} -> {outcome.status.value}")
                self._print_failure_details(outcome, indent="    ")

    def _styled(self, text: str, *, color: str | None = None) -> str:
        if not self._use_color or color is None:
            return text
        return click.style(text, fg=color)

    def _print_failure_details(self, outcome: CaseOutcome, *, indent: str) -> None:
        if outcome.location:
            click.echo(f"{indent}at {outcome.location}")
        for line in (outcome.message or "").splitlines():
            click.echo(f"{indent}{line}")
        if self._show_tracebacks and outcome.traceback:
            for line in outcome.traceback.rstrip().splitlines():
                click.echo(f"{indent}| {line}")
