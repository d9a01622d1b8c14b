"""unitharness package initialization."""
from __future__ import annotations

import logging
import os

from .core import (
    CaseOutcome,
    CaseStatus,
    CaseSucceeded,
    Checker,
    FailureSignal,
    HardFailure,
    RunReport,
    Severity,
    SoftFailure,
    TestCase,
    expect,
    require,
    succeed,
)
from .registry import clear_registry, get_registry, register, testcase
from .core.runner import TestRunner, run_all
from .utils.importing import load_module
from .version import __version__

__all__ = [
    "__version__",
    "bootstrap",
    "CaseOutcome",
    "CaseStatus",
    "CaseSucceeded",
    "Checker",
    "FailureSignal",
    "HardFailure",
    "RunReport",
    "Severity",
    "SoftFailure",
    "TestCase",
    "TestRunner",
    "clear_registry",
    "expect",
    "get_registry",
    "register",
    "require",
    "run_all",
    "succeed",
    "testcase",
]

MODULES_ENV = "UNITHARNESS_MODULES"

logger = logging.getLogger(__name__)

_BOOTSTRAPPED = False


def bootstrap() -> None:
    """Import the case modules listed in ``UNITHARNESS_MODULES`` (idempotent)."""

    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return
    _load_env_modules()
    _BOOTSTRAPPED = True


def _load_env_modules() -> None:
    modules_env = os.environ.get(MODULES_ENV)
    if not modules_env:
        return
    for item in modules_env.split(","):
        target = item.strip()
        if not target:
            continue
        logger.debug("Loading case module %s from %s", target, MODULES_ENV)
        load_module(target)
