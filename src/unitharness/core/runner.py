"""Test runner executing registered cases and building the run report."""
from __future__ import annotations

import logging
import time
import traceback
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from unitharness.registry import CaseRegistry, get_registry

from .checks import describe_error
from .models import CaseStatus, RunState, TestCase
from .results import CaseOutcome, RunReport
from .signals import CaseSucceeded, FailureSignal, Severity

logger = logging.getLogger(__name__)

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent

_SEVERITY_STATUS = {
    Severity.SOFT: CaseStatus.SOFT_FAILED,
    Severity.HARD: CaseStatus.HARD_FAILED,
}

ResultCallback = Callable[[CaseOutcome, int, int], None]


class TestRunner:
    """Executes test cases sequentially, one at a time."""

    __test__ = False

    def __init__(self, registry: Optional[CaseRegistry] = None) -> None:
        self._registry = registry
        self.state = RunState.IDLE

    def run(
        self,
        cases: Optional[Sequence[TestCase]] = None,
        *,
        on_result: Optional[ResultCallback] = None,
    ) -> RunReport:
        """Run ``cases``, or every registered case when none are given."""

        if cases is None:
            registry = self._registry if self._registry is not None else get_registry()
            registry.seal()
            cases = list(registry.cases())
        self.state = RunState.EXECUTING
        outcomes: List[CaseOutcome] = []
        total = len(cases)
        logger.info("Running %d test case(s)", total)
        start = time.perf_counter()
        for index, case in enumerate(cases, start=1):
            outcome = self._execute_case(case)
            outcomes.append(outcome)
            logger.debug("%s -> %s", case.identifier(), outcome.status.value)
            if on_result:
                on_result(outcome, index, total)
        report = RunReport(outcomes=tuple(outcomes), duration_s=time.perf_counter() - start)
        self.state = RunState.COMPLETED
        logger.info(
            "Run complete: total=%d passed=%d soft_failed=%d hard_failed=%d crashed=%d",
            report.total,
            report.passed,
            report.soft_failed,
            report.hard_failed,
            report.crashed,
        )
        return report

    def _execute_case(self, case: TestCase) -> CaseOutcome:
        start = time.perf_counter()
        try:
            case.body()
        except CaseSucceeded:
            return CaseOutcome(case=case, status=CaseStatus.PASSED, duration_s=time.perf_counter() - start)
        except FailureSignal as signal:
            return CaseOutcome(
                case=case,
                status=_SEVERITY_STATUS[signal.severity],
                duration_s=time.perf_counter() - start,
                message=signal.message,
                location=_locate(signal),
            )
        except Exception as exc:
            return CaseOutcome(
                case=case,
                status=CaseStatus.CRASHED,
                duration_s=time.perf_counter() - start,
                message=describe_error(exc),
                location=_locate(exc),
                traceback="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            )
        return CaseOutcome(case=case, status=CaseStatus.PASSED, duration_s=time.perf_counter() - start)


def _locate(exc: BaseException) -> Optional[str]:
    """Return ``file:line`` of the innermost traceback frame outside this package."""

    location = None
    for frame in traceback.extract_tb(exc.__traceback__):
        try:
            inside = Path(frame.filename).resolve().is_relative_to(_PACKAGE_ROOT)
        except OSError:
            inside = False
        if not inside:
            location = f"{frame.filename}:{frame.lineno}"
    return location


def run_all(registry: Optional[CaseRegistry] = None) -> RunReport:
    """Run every registered case and return the report."""

    return TestRunner(registry).run()
