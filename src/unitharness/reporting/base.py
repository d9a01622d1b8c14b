"""Reporter interface definitions."""
from __future__ import annotations

from typing import List, Sequence

from unitharness.core.results import CaseOutcome, RunReport


class Reporter:
    """Interface for output renderers."""

    def on_start(self, total: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, outcome: CaseOutcome, index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, report: RunReport) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def start(self, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_start(total)

    def handle_result(self, outcome: CaseOutcome, index: int, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_case_result(outcome, index, total)

    def complete(self, report: RunReport) -> None:
        for reporter in self._reporters:
            reporter.on_complete(report)

    def reporters(self) -> List[Reporter]:
        return list(self._reporters)
