"""Core models, signals and checks exposed at the package level."""
from .checks import Checker, expect, require, succeed
from .models import CaseStatus, RunState, TestCase
from .results import CaseOutcome, RunReport
from .signals import CaseSucceeded, FailureSignal, HardFailure, Severity, SoftFailure

__all__ = [
    "CaseOutcome",
    "CaseStatus",
    "CaseSucceeded",
    "Checker",
    "FailureSignal",
    "HardFailure",
    "RunReport",
    "RunState",
    "Severity",
    "SoftFailure",
    "TestCase",
    "expect",
    "require",
    "succeed",
]
