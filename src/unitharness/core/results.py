"""Result data structures produced by the test runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .models import CaseStatus, TestCase


@dataclass(frozen=True)
class CaseOutcome:
    """Outcome of executing a single test case."""

    case: TestCase
    status: CaseStatus
    duration_s: float = 0.0
    message: Optional[str] = None
    location: Optional[str] = None
    traceback: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status is CaseStatus.PASSED


@dataclass(frozen=True)
class RunReport:
    """Ordered outcomes of one run plus derived counts."""

    outcomes: Tuple[CaseOutcome, ...] = field(default_factory=tuple)
    duration_s: float = 0.0

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    def by_status(self, status: CaseStatus) -> Tuple[CaseOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.status is status)

    def _count(self, status: CaseStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return self._count(CaseStatus.PASSED)

    @property
    def soft_failed(self) -> int:
        return self._count(CaseStatus.SOFT_FAILED)

    @property
    def hard_failed(self) -> int:
        return self._count(CaseStatus.HARD_FAILED)

    @property
    def crashed(self) -> int:
        return self._count(CaseStatus.CRASHED)

    @property
    def failures(self) -> int:
        return self.total - self.passed

    @property
    def successful(self) -> bool:
        return self.failures == 0

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 when every case passed, 1 otherwise."""

        return 0 if self.successful else 1

    def suites(self) -> Tuple[str, ...]:
        names: list[str] = []
        for outcome in self.outcomes:
            if outcome.case.suite not in names:
                names.append(outcome.case.suite)
        return tuple(names)
