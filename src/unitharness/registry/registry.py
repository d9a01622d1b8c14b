"""Process-wide test case registry."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from unitharness.core.models import CaseBody, TestCase

logger = logging.getLogger(__name__)


class RegistrationClosedError(RuntimeError):
    """Raised when a case is registered after execution has started."""


class SuiteView:
    """Restartable iteration over ``(suite_name, cases)`` pairs."""

    def __init__(self, suites: Dict[str, List[TestCase]]) -> None:
        self._suites = suites

    def __iter__(self) -> Iterator[Tuple[str, Tuple[TestCase, ...]]]:
        for suite, cases in self._suites.items():
            yield suite, tuple(cases)

    def __len__(self) -> int:
        return len(self._suites)


class CaseRegistry:
    """Stores test cases grouped by suite in first-registration order."""

    def __init__(self) -> None:
        self._suites: Dict[str, List[TestCase]] = {}
        self._keys: Set[Tuple[str, str]] = set()
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Close the registration phase; called when a runner starts reading."""

        if not self._sealed:
            logger.debug("Registry sealed with %d case(s)", len(self))
        self._sealed = True

    def register(self, suite: str, name: str, body: CaseBody) -> TestCase:
        if self._sealed:
            raise RegistrationClosedError(
                f"Cannot register '{suite}.{name}': execution has already started"
            )
        if not suite or not name:
            raise ValueError("Suite and case names must be non-empty")
        if not callable(body):
            raise ValueError(f"Body of '{suite}.{name}' is not callable")
        case = TestCase(suite=suite, name=name, body=body)
        if case.key in self:
            logger.warning("Duplicate test case '%s' registered; both will run", case.identifier())
        self._suites.setdefault(suite, []).append(case)
        self._keys.add(case.key)
        logger.debug("Registered test case %s", case.identifier())
        return case

    def all_suites(self) -> SuiteView:
        return SuiteView(self._suites)

    def suite_names(self) -> Tuple[str, ...]:
        return tuple(self._suites.keys())

    def cases(self) -> Iterator[TestCase]:
        for _, cases in self.all_suites():
            yield from cases

    def __contains__(self, key: object) -> bool:
        return isinstance(key, tuple) and key in self._keys

    def __len__(self) -> int:
        return sum(len(cases) for cases in self._suites.values())


_registry: Optional[CaseRegistry] = None


def get_registry() -> CaseRegistry:
    """Return the process registry, constructing it on first access."""

    global _registry
    if _registry is None:
        _registry = CaseRegistry()
    return _registry


def register(suite: str, name: str, body: CaseBody) -> TestCase:
    return get_registry().register(suite, name, body)


def testcase(suite: str, name: Optional[str] = None) -> Callable[[CaseBody], CaseBody]:
    """Decorator registering the decorated function as ``suite.name``.

    The case name defaults to the function name. The function is returned
    unchanged so it can still be called directly.
    """

    def decorator(body: CaseBody) -> CaseBody:
        register(suite, name or body.__name__, body)
        return body

    return decorator


testcase.__test__ = False  # type: ignore[attr-defined]


def clear_registry() -> None:
    """Drop the process registry; the next access builds a fresh, unsealed one."""

    global _registry
    _registry = None
