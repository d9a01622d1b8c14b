"""Test case registry public API."""
from .registry import (
    CaseRegistry,
    RegistrationClosedError,
    SuiteView,
    clear_registry,
    get_registry,
    register,
    testcase,
)

__all__ = [
    "CaseRegistry",
    "RegistrationClosedError",
    "SuiteView",
    "get_registry",
    "register",
    "testcase",
    "clear_registry",
]
