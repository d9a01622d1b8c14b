from __future__ import annotations

from pathlib import Path

from unitharness import (
    CaseStatus,
    TestCase,
    expect,
    get_registry,
    register,
    require,
    run_all,
    succeed,
)
from unitharness.core.models import RunState
from unitharness.core.runner import TestRunner
from unitharness.registry import CaseRegistry


def _passing() -> None:
    expect.eq(1 + 1, 2)
    require.lt(1, 2)


def _register_mixed() -> None:
    register("Mixed", "passes", _passing)
    register("Mixed", "soft", lambda: expect.eq(1, 2))
    register("Mixed", "hard", lambda: require.fail("fatal"))
    register("Other", "crash", lambda: {}["missing"])


def test_outcome_count_matches_registered_cases() -> None:
    _register_mixed()
    report = run_all()
    assert len(report) == len(get_registry()) == 4
    assert [outcome.case.identifier() for outcome in report] == [
        "Mixed.passes",
        "Mixed.soft",
        "Mixed.hard",
        "Other.crash",
    ]


def test_statuses_and_counts() -> None:
    _register_mixed()
    report = run_all()
    assert [outcome.status for outcome in report] == [
        CaseStatus.PASSED,
        CaseStatus.SOFT_FAILED,
        CaseStatus.HARD_FAILED,
        CaseStatus.CRASHED,
    ]
    assert (report.total, report.passed, report.soft_failed, report.hard_failed, report.crashed) == (4, 1, 1, 1, 1)
    assert report.failures == 3
    assert report.exit_code == 1
    assert report.suites() == ("Mixed", "Other")
    assert [outcome.case.name for outcome in report.by_status(CaseStatus.HARD_FAILED)] == ["hard"]


def test_hard_failure_stops_the_case() -> None:
    marker: list[str] = []

    def body() -> None:
        require.eq(1, 2)
        marker.append("after")

    register("Stop", "hard", body)
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.HARD_FAILED
    assert outcome.message == "1 != 2"
    assert marker == []


def test_soft_failure_also_stops_the_case() -> None:
    marker: list[str] = []

    def body() -> None:
        expect.eq(1, 2)
        marker.append("after")

    register("Stop", "soft", body)
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.SOFT_FAILED
    assert marker == []


def test_succeed_ends_case_as_passed() -> None:
    marker: list[str] = []

    def body() -> None:
        succeed()
        marker.append("after")
        require.fail("unreachable")

    register("Early", "pass", body)
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.PASSED
    assert outcome.message is None
    assert marker == []


def test_foreign_error_is_recorded_as_crash() -> None:
    register("Crash", "key", lambda: {}["missing"])
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.CRASHED
    assert outcome.message == "KeyError: 'missing'"
    assert outcome.traceback is not None
    assert "KeyError" in outcome.traceback


def test_foreign_error_inside_check_is_attributed_to_the_check() -> None:
    def body() -> None:
        expect.pred1(lambda value: value / 0, 1)

    register("Attributed", "pred", body)
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.SOFT_FAILED
    assert outcome.message == "ZeroDivisionError: division by zero"
    assert outcome.traceback is None


def test_location_points_at_the_case_source() -> None:
    def body() -> None:
        require.true(False)

    register("Where", "line", body)
    outcome = run_all().outcomes[0]
    assert outcome.location is not None
    filename, line = outcome.location.rsplit(":", 1)
    assert Path(filename).name == "test_runner.py"
    assert int(line) > 0


def test_one_bad_case_does_not_abort_the_run() -> None:
    register("Run", "crash", lambda: 1 / 0)
    register("Run", "passes", _passing)
    report = run_all()
    assert [outcome.status for outcome in report] == [CaseStatus.CRASHED, CaseStatus.PASSED]


def test_running_twice_gives_identical_classification() -> None:
    _register_mixed()
    first = run_all()
    second = run_all()
    assert [(o.case.key, o.status, o.message) for o in first] == [
        (o.case.key, o.status, o.message) for o in second
    ]
    assert (first.passed, first.failures) == (second.passed, second.failures)


def test_empty_registry_reports_success() -> None:
    report = run_all()
    assert report.total == 0
    assert report.successful
    assert report.exit_code == 0


def test_runner_state_and_callback() -> None:
    _register_mixed()
    seen: list[tuple[str, int, int]] = []
    runner = TestRunner()
    assert runner.state is RunState.IDLE
    runner.run(on_result=lambda outcome, index, total: seen.append((outcome.case.name, index, total)))
    assert runner.state is RunState.COMPLETED
    assert seen == [("passes", 1, 4), ("soft", 2, 4), ("hard", 3, 4), ("crash", 4, 4)]


def test_explicit_cases_do_not_touch_the_registry() -> None:
    report = TestRunner().run([TestCase(suite="Adhoc", name="ok", body=_passing)])
    assert report.passed == 1
    assert not get_registry().sealed
    assert report.outcomes[0].duration_s >= 0.0


def test_empty_explicit_registry_is_not_replaced_by_the_process_registry() -> None:
    register("Global", "case", _passing)
    local = CaseRegistry()
    report = TestRunner(local).run()
    assert report.total == 0
    assert local.sealed
    assert not get_registry().sealed
    assert run_all(CaseRegistry()).total == 0


def test_eager_operand_error_crashes_the_case() -> None:
    register("Operands", "eager", lambda: expect.eq({}["missing"], 1))
    outcome = run_all().outcomes[0]
    assert outcome.status is CaseStatus.CRASHED


def test_lazy_condition_error_is_attributed_to_the_check() -> None:
    def soft() -> None:
        expect.that(lambda: {}["missing"] == 1)

    def hard() -> None:
        require.that(lambda: {}["missing"] == 1)

    register("Operands", "soft", soft)
    register("Operands", "hard", hard)
    soft_outcome, hard_outcome = run_all().outcomes
    assert soft_outcome.status is CaseStatus.SOFT_FAILED
    assert soft_outcome.message == "KeyError: 'missing'"
    assert soft_outcome.traceback is None
    assert hard_outcome.status is CaseStatus.HARD_FAILED
    assert hard_outcome.message == "KeyError: 'missing'"
