"""One case per outcome, to see how the reporters render each of them."""
from unitharness import expect, require, succeed, testcase


@testcase("Outcomes", "passes")
def passes() -> None:
    expect.eq(sum([1, 2, 3]), 6)


@testcase("Outcomes", "passes_early")
def passes_early() -> None:
    succeed()
    require.fail("never reached")


@testcase("Outcomes", "soft_failure")
def soft_failure() -> None:
    expect.strcaseeq("Hello", "World", msg="greeting mismatch")


@testcase("Outcomes", "hard_failure")
def hard_failure() -> None:
    require.lt(10, 3)


@testcase("Outcomes", "crash")
def crash() -> None:
    {}["missing"]
