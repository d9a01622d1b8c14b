"""Assertion-style checks evaluated inside test case bodies.

Every check follows the same protocol: the condition is evaluated inside a
guard, a foreign exception raised while evaluating it is re-raised as this
checker's own failure signal (chained via ``__cause__``), a condition that
does not hold raises the signal with a message describing the operands, and
a condition that holds returns ``None``.

Operands passed to ``eq``, ``true`` and friends are evaluated by Python
before the check runs. Wrap the expression in ``that(lambda: ...)`` when
computing the operands may itself raise.

``expect`` raises :class:`SoftFailure` and ``require`` raises
:class:`HardFailure`. Either one ends the current case; the runner only
classifies them differently.
"""
from __future__ import annotations

import string
from typing import Any, Callable, Optional, Tuple, Type, Union

import numpy as np

from .signals import CaseSucceeded, FailureSignal, Severity, signal_for

ExceptionKind = Union[Type[BaseException], Tuple[Type[BaseException], ...]]
Statement = Callable[[], Any]

DEFAULT_ULPS = 4
FLOAT_EPSILON = float(np.finfo(np.float32).eps)
DOUBLE_EPSILON = float(np.finfo(np.float64).eps)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def render(value: Any) -> str:
    """Return ``repr(value)``, or a placeholder when the value cannot render itself."""

    try:
        return repr(value)
    except Exception:  # noqa: BLE001 - a broken __repr__ must not hide the failure
        return f"<unrenderable {type(value).__name__}>"


def ascii_lower(text: str) -> str:
    """Lowercase ``A``-``Z`` only; every other character is left untouched."""

    return text.translate(_ASCII_LOWER)


def describe_error(exc: BaseException) -> str:
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


def _callable_name(func: Callable[..., Any]) -> str:
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if not name:
        return render(func)
    if name.endswith("<lambda>"):
        return "statement"
    return name


def _kind_name(kind: ExceptionKind) -> str:
    if isinstance(kind, tuple):
        return "(" + ", ".join(item.__name__ for item in kind) + ")"
    return kind.__name__


def succeed() -> None:
    """End the current case immediately with a passed outcome."""

    raise CaseSucceeded()


class Checker:
    """Family of checks that all fail with the same severity."""

    def __init__(self, severity: Severity) -> None:
        self.severity = Severity(severity)

    def __repr__(self) -> str:
        return f"Checker({self.severity.value})"

    # -- protocol -----------------------------------------------------------------

    def _signal(self, text: str, msg: Optional[str] = None) -> FailureSignal:
        if msg:
            text = f"{text}\n{msg}"
        return signal_for(self.severity, text)

    def _guard(self, compute: Callable[[], Any], msg: Optional[str]) -> Any:
        try:
            return compute()
        except (FailureSignal, CaseSucceeded):
            raise
        except Exception as exc:
            raise self._signal(describe_error(exc), msg) from exc

    def _check(
        self,
        condition: Callable[[], Any],
        describe: Callable[[], str],
        msg: Optional[str],
    ) -> None:
        if self._guard(lambda: bool(condition()), msg):
            return
        raise self._signal(describe(), msg)

    # -- explicit -----------------------------------------------------------------

    def fail(self, reason: str = "") -> None:
        """Fail unconditionally."""

        text = f"Explicit failure: {reason}" if reason else "Explicit failure"
        raise self._signal(text)

    # -- boolean ------------------------------------------------------------------

    def that(self, condition: Callable[[], Any], *, msg: Optional[str] = None) -> None:
        """Hold when ``condition()`` is truthy.

        The whole expression runs inside the guard, so an exception raised
        while computing the operands is reported as this check's failure
        rather than crashing the case.
        """

        _require_callable(condition)
        name = _callable_name(condition)
        if name == "statement":
            name = "condition"
        self._check(condition, lambda: f"{name} is not true", msg)

    def true(self, condition: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: condition, lambda: f"{render(condition)} is not true", msg)

    def false(self, condition: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: not condition, lambda: f"{render(condition)} is not false", msg)

    # -- equality and ordering ----------------------------------------------------

    def eq(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 == val2, lambda: f"{render(val1)} != {render(val2)}", msg)

    def ne(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 != val2, lambda: f"{render(val1)} == {render(val2)}", msg)

    def lt(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 < val2, lambda: f"{render(val1)} >= {render(val2)}", msg)

    def le(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 <= val2, lambda: f"{render(val1)} > {render(val2)}", msg)

    def gt(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 > val2, lambda: f"{render(val1)} <= {render(val2)}", msg)

    def ge(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        self._check(lambda: val1 >= val2, lambda: f"{render(val1)} < {render(val2)}", msg)

    # -- floating point -----------------------------------------------------------

    def float_eq(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        """Relative comparison in single precision (4 x float32 epsilon)."""

        self._ulps_check(np.float32, val1, val2, msg)

    def double_eq(self, val1: Any, val2: Any, *, msg: Optional[str] = None) -> None:
        """Relative comparison in double precision (4 x float64 epsilon)."""

        self._ulps_check(np.float64, val1, val2, msg)

    def _ulps_check(self, dtype: type, val1: Any, val2: Any, msg: Optional[str]) -> None:
        def within() -> bool:
            a, b = dtype(val1), dtype(val2)
            epsilon = dtype(DEFAULT_ULPS) * np.finfo(dtype).eps
            return bool(np.abs(a - b) <= epsilon * np.maximum(np.abs(a), np.abs(b)))

        def describe() -> str:
            diff = float(np.abs(dtype(val1) - dtype(val2)))
            return (
                f"Expected: {render(val1)} == {render(val2)} "
                f"({np.dtype(dtype).name}, {DEFAULT_ULPS} ulps)\n"
                f"Actual difference: {diff!r}"
            )

        self._check(within, describe, msg)

    def near(self, val1: Any, val2: Any, tolerance: Any, *, msg: Optional[str] = None) -> None:
        """Absolute comparison: holds when ``abs(val1 - val2) <= tolerance``."""

        self._check(
            lambda: abs(val1 - val2) <= tolerance,
            lambda: f"abs({render(val1)} - {render(val2)}) > {render(tolerance)}",
            msg,
        )

    def not_near(self, val1: Any, val2: Any, tolerance: Any, *, msg: Optional[str] = None) -> None:
        self._check(
            lambda: abs(val1 - val2) > tolerance,
            lambda: f"abs({render(val1)} - {render(val2)}) <= {render(tolerance)}",
            msg,
        )

    # -- strings ------------------------------------------------------------------

    def _strings(self, str1: Any, str2: Any, msg: Optional[str]) -> Tuple[str, str]:
        return self._guard(lambda: (str(str1), str(str2)), msg)

    def streq(self, str1: Any, str2: Any, *, msg: Optional[str] = None) -> None:
        s1, s2 = self._strings(str1, str2, msg)
        self._check(
            lambda: s1 == s2,
            lambda: f'Expected equal strings\nActual: "{s1}" vs "{s2}"',
            msg,
        )

    def strne(self, str1: Any, str2: Any, *, msg: Optional[str] = None) -> None:
        s1, s2 = self._strings(str1, str2, msg)
        self._check(
            lambda: s1 != s2,
            lambda: f'Expected different strings\nActual: both are "{s1}"',
            msg,
        )

    def strcaseeq(self, str1: Any, str2: Any, *, msg: Optional[str] = None) -> None:
        """Equality after ASCII lowercasing; the message keeps the original text."""

        s1, s2 = self._strings(str1, str2, msg)
        self._check(
            lambda: ascii_lower(s1) == ascii_lower(s2),
            lambda: f'Expected equal strings (ignoring case)\nActual: "{s1}" vs "{s2}"',
            msg,
        )

    def strcasene(self, str1: Any, str2: Any, *, msg: Optional[str] = None) -> None:
        s1, s2 = self._strings(str1, str2, msg)
        self._check(
            lambda: ascii_lower(s1) != ascii_lower(s2),
            lambda: f'Expected different strings (ignoring case)\nActual: "{s1}" vs "{s2}"',
            msg,
        )

    # -- predicates ---------------------------------------------------------------

    def pred1(self, pred: Callable[[Any], Any], val1: Any, *, msg: Optional[str] = None) -> None:
        self._check(
            lambda: pred(val1),
            lambda: f"{_callable_name(pred)}({render(val1)}) failed",
            msg,
        )

    def pred2(
        self,
        pred: Callable[[Any, Any], Any],
        val1: Any,
        val2: Any,
        *,
        msg: Optional[str] = None,
    ) -> None:
        self._check(
            lambda: pred(val1, val2),
            lambda: f"{_callable_name(pred)}({render(val1)}, {render(val2)}) failed",
            msg,
        )

    # -- exceptions ---------------------------------------------------------------
    #
    # These catch any Exception, this harness's own signals included, so a
    # failing check can itself be the statement under test.

    def raises(self, statement: Statement, kind: ExceptionKind, *, msg: Optional[str] = None) -> None:
        """Hold when ``statement()`` raises an instance of ``kind``."""

        _require_callable(statement)
        name = _callable_name(statement)
        try:
            statement()
        except kind:
            return
        except Exception as exc:
            raise self._signal(
                f"{name} raised {describe_error(exc)}, expected {_kind_name(kind)}", msg
            ) from exc
        raise self._signal(f"{name} raised no exception, expected {_kind_name(kind)}", msg)

    def raises_any(self, statement: Statement, *, msg: Optional[str] = None) -> None:
        _require_callable(statement)
        try:
            statement()
        except Exception:
            return
        raise self._signal(f"{_callable_name(statement)} raised no exception", msg)

    def no_raise(self, statement: Statement, *, msg: Optional[str] = None) -> None:
        _require_callable(statement)
        try:
            statement()
        except Exception as exc:
            raise self._signal(
                f"{_callable_name(statement)} raised {describe_error(exc)}", msg
            ) from exc


def _require_callable(statement: Any) -> None:
    if not callable(statement):
        raise TypeError(f"Statement must be a zero-argument callable, got {render(statement)}")


expect = Checker(Severity.SOFT)
require = Checker(Severity.HARD)
