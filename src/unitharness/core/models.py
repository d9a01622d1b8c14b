"""Core dataclasses shared across unitharness subsystems."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


CaseBody = Callable[[], None]


class CaseStatus(str, Enum):
    """Terminal state of an executed case."""

    PASSED = "passed"
    SOFT_FAILED = "soft_failed"
    HARD_FAILED = "hard_failed"
    CRASHED = "crashed"


class RunState(str, Enum):
    """Lifecycle of a single runner invocation."""

    IDLE = "idle"
    EXECUTING = "executing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class TestCase:
    """A named unit of test logic belonging to a suite."""

    __test__ = False  # keep pytest from collecting this class

    suite: str
    name: str
    body: CaseBody = field(compare=False, repr=False)

    @property
    def key(self) -> tuple[str, str]:
        return (self.suite, self.name)

    def identifier(self) -> str:
        return f"{self.suite}.{self.name}"
