"""Failure signals raised by checks and caught at the case boundary."""
from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """How the runner classifies a failed check."""

    SOFT = "soft"
    HARD = "hard"


class FailureSignal(Exception):
    """Base class for every failure produced through the check protocol."""

    severity: Severity

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SoftFailure(FailureSignal):
    """Raised by ``expect`` checks; reported as an assertion mismatch."""

    severity = Severity.SOFT


class HardFailure(FailureSignal):
    """Raised by ``require`` checks; reported as a case-fatal error."""

    severity = Severity.HARD


class CaseSucceeded(Exception):
    """Ends the current case early with a passed outcome."""


SIGNAL_TYPES = {
    Severity.SOFT: SoftFailure,
    Severity.HARD: HardFailure,
}


def signal_for(severity: Severity, message: str) -> FailureSignal:
    return SIGNAL_TYPES[severity](message)
