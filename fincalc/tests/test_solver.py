from __future__ import annotations

from math import isclose

from fincalc.core.solver import RootStatus, bisect, bisect_integer


def test_bisect_finds_root_inside_bracket():
    result = bisect(lambda x: x ** 3, 8.0, 0.0, 5.0, iterations=90)
    assert result.status == RootStatus.CONVERGED
    assert isclose(result.value, 2.0, rel_tol=1e-12)


def test_bisect_expands_upper_bound():
    result = bisect(lambda x: x, 7.0, 0.0, 2.0, ceiling=20.0, expand_factor=1.5)
    assert result.converged
    assert result.expansions > 0
    assert isclose(result.value, 7.0, rel_tol=1e-9)


def test_bisect_reports_target_below_range():
    result = bisect(lambda x: x, -5.0, -0.99, 2.0)
    assert result.status == RootStatus.BELOW_RANGE
    assert result.value == -0.99


def test_bisect_reports_target_above_range_without_raising():
    result = bisect(lambda x: x, 1000.0, 0.0, 2.0, ceiling=20.0, max_expansions=30)
    assert result.status == RootStatus.ABOVE_RANGE
    assert result.value == 20.0


def test_bisect_expansion_cap_is_respected():
    calls = []

    def f(x):
        calls.append(x)
        return x

    result = bisect(f, 1e9, 0.0, 1.0, ceiling=1e12, max_expansions=3, expand_factor=2.0)
    assert result.status == RootStatus.ABOVE_RANGE
    assert result.expansions == 3
    assert result.value == 8.0


def test_bisect_integer_smallest_reaching_value():
    result = bisect_integer(lambda n: n * n, 50, 0, 1200)
    assert result.converged
    assert result.value == 8


def test_bisect_integer_expands_and_caps():
    reached = bisect_integer(lambda n: n, 5000, 0, 1200, ceiling=100000)
    assert reached.converged
    assert reached.value == 5000

    unreachable = bisect_integer(lambda n: 0.0, 1.0, 0, 1200, ceiling=100000)
    assert unreachable.status == RootStatus.ABOVE_RANGE


def test_bisect_integer_zero_when_already_met():
    result = bisect_integer(lambda n: 10.0 + n, 5.0)
    assert result.converged
    assert result.value == 0
