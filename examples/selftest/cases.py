"""Cases that exercise the checks against themselves; every one should pass."""
from unitharness import expect, require, testcase


@testcase("Expect", "Throw")
def expect_throw() -> None:
    expect.raises(lambda: _raise(RuntimeError("boom")), RuntimeError)
    expect.no_raise(lambda: 1 + 1)
    expect.raises_any(lambda: _raise(ValueError()))

    expect.raises_any(lambda: expect.raises(lambda: 1 + 1, Exception))
    expect.raises_any(lambda: expect.raises(lambda: _raise(ValueError()), RuntimeError))
    expect.raises_any(lambda: expect.no_raise(lambda: _raise(ValueError())))
    expect.raises_any(lambda: expect.raises_any(lambda: 1 + 1))


@testcase("Expect", "Eq")
def expect_eq() -> None:
    expect.eq(1, 1)
    expect.ne(1, 2)
    expect.lt(1, 2)
    expect.le(1, 2)
    expect.le(1, 1)
    expect.gt(2, 1)
    expect.ge(2, 1)
    expect.ge(1, 1)

    expect.raises_any(lambda: expect.eq(1, 2))
    expect.raises_any(lambda: expect.ne(1, 1))
    expect.raises_any(lambda: expect.lt(2, 1))
    expect.raises_any(lambda: expect.lt(1, 1))
    expect.raises_any(lambda: expect.le(2, 1))
    expect.raises_any(lambda: expect.gt(1, 2))
    expect.raises_any(lambda: expect.gt(1, 1))
    expect.raises_any(lambda: expect.ge(1, 2))


@testcase("Assert", "Throw")
def assert_throw() -> None:
    require.raises(lambda: _raise(RuntimeError("boom")), RuntimeError)
    require.no_raise(lambda: 1 + 1)
    require.raises_any(lambda: _raise(ValueError()))

    expect.raises_any(lambda: require.raises(lambda: 1 + 1, Exception))
    expect.raises_any(lambda: require.raises(lambda: _raise(ValueError()), RuntimeError))
    expect.raises_any(lambda: require.no_raise(lambda: _raise(ValueError())))
    expect.raises_any(lambda: require.raises_any(lambda: 1 + 1))


@testcase("Float", "Tolerance")
def float_tolerance() -> None:
    expect.double_eq(1.0, 1.0)
    expect.float_eq(1.0000001, 1.0000002)
    expect.near(1.05, 1.04, 0.02)
    expect.not_near(1.05, 1.04, 0.002)
    expect.raises_any(lambda: expect.double_eq(1.0, 2.0))


@testcase("String", "Compare")
def string_compare() -> None:
    expect.streq("abc", "abc")
    expect.strne("abc", "abd")
    expect.strcaseeq("Hello", "hello")
    expect.strcasene("hello", "world")
    expect.pred1(str.isdigit, "123")
    expect.pred2(str.startswith, "unitharness", "unit")


def _raise(exc: Exception) -> None:
    raise exc
