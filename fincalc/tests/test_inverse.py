from __future__ import annotations

from dataclasses import replace
from math import isclose

import pytest

from fincalc.config import Limits
from fincalc.core.annuity import effective_rate_per_period, future_value
from fincalc.core.inverse import AnnuityInputs, SolveMode, solve
from fincalc.domain.ledger import CalcStatus


def base_inputs() -> AnnuityInputs:
    return AnnuityInputs(
        present_value=20000,
        payment=1000,
        nominal_rate=0.06,
        years=10,
        target_future_value=198290.4,
        compounding_per_year=1,
        periods_per_year=12,
        contribute_at_begin=False,
    )


def fv_for(inputs: AnnuityInputs) -> float:
    return future_value(
        inputs.present_value,
        inputs.payment,
        inputs.rate_per_period,
        inputs.period_count,
        inputs.contribute_at_begin,
    )


def test_end_value_matches_default_target():
    solution = solve(base_inputs(), SolveMode.END_VALUE)
    assert solution.solved
    assert isclose(solution.value, 198290.4, abs_tol=1.0)


@pytest.mark.parametrize("begin", [False, True])
def test_contribution_round_trip(begin):
    inputs = replace(base_inputs(), target_future_value=350000, contribute_at_begin=begin)
    solution = solve(inputs, SolveMode.CONTRIBUTION)
    assert solution.solved
    check = replace(inputs, payment=solution.value)
    assert isclose(fv_for(check), 350000, rel_tol=1e-6)


def test_start_value_round_trip():
    inputs = replace(base_inputs(), target_future_value=500000)
    solution = solve(inputs, SolveMode.START_VALUE)
    assert solution.solved
    assert isclose(fv_for(replace(inputs, present_value=solution.value)), 500000, rel_tol=1e-6)


def test_rate_round_trip():
    inputs = replace(base_inputs(), target_future_value=250000)
    solution = solve(inputs, SolveMode.RATE)
    assert solution.solved
    assert isclose(fv_for(replace(inputs, nominal_rate=solution.value)), 250000, rel_tol=1e-9)


def test_rate_recovers_the_default_six_percent():
    solution = solve(base_inputs(), SolveMode.RATE)
    assert isclose(solution.value, 0.06, abs_tol=1e-5)


def test_solved_rate_increases_with_target():
    rates = [
        solve(replace(base_inputs(), target_future_value=target), SolveMode.RATE).value
        for target in (150000, 200000, 250000, 400000)
    ]
    assert rates == sorted(rates)
    assert len(set(rates)) == len(rates)


def test_future_value_increases_with_rate():
    values = [fv_for(replace(base_inputs(), nominal_rate=rate)) for rate in (-0.05, 0.0, 0.03, 0.06, 0.12)]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_rate_below_range_returns_floor():
    inputs = replace(base_inputs(), target_future_value=1000)
    solution = solve(inputs, SolveMode.RATE)
    assert solution.status == CalcStatus.NO_SOLUTION_IN_RANGE
    assert solution.bound == "low"
    assert solution.value == -0.99


def test_rate_above_range_returns_expanded_ceiling():
    inputs = replace(base_inputs(), target_future_value=1e300)
    solution = solve(inputs, SolveMode.RATE)
    assert solution.status == CalcStatus.NO_SOLUTION_IN_RANGE
    assert solution.bound == "high"
    assert solution.value == 20.0


def test_rate_with_zero_periods_is_zero():
    solution = solve(replace(base_inputs(), years=0), SolveMode.RATE)
    assert solution.value == 0.0


def test_length_solves_whole_periods():
    inputs = replace(base_inputs(), target_future_value=198000)
    solution = solve(inputs, SolveMode.LENGTH)
    assert solution.solved
    n = int(solution.value)
    rate = effective_rate_per_period(0.06, 1, 12)
    assert future_value(20000, 1000, rate, n) >= inputs.target_future_value
    assert future_value(20000, 1000, rate, n - 1) < inputs.target_future_value
    assert n == 120


def test_length_zero_rate_uses_linear_form():
    inputs = replace(base_inputs(), nominal_rate=0.0, present_value=1000, payment=100, target_future_value=2050)
    assert solve(inputs, SolveMode.LENGTH).value == 11


def test_length_zero_rate_zero_payment():
    met = replace(base_inputs(), nominal_rate=0.0, payment=0, present_value=5000, target_future_value=5000)
    assert solve(met, SolveMode.LENGTH).value == 0

    unmet = replace(met, target_future_value=5001)
    solution = solve(unmet, SolveMode.LENGTH)
    assert solution.status == CalcStatus.NO_SOLUTION_IN_RANGE
    assert solution.value is None


def test_length_unreachable_with_growth_is_not_a_number_of_periods():
    inputs = replace(base_inputs(), nominal_rate=-0.5, payment=0, target_future_value=1e9)
    solution = solve(inputs, SolveMode.LENGTH)
    assert solution.status == CalcStatus.NO_SOLUTION_IN_RANGE
    assert solution.value is None


def test_limits_shrink_the_rate_search():
    limits = Limits(rate_bracket_ceiling=2.0)
    inputs = replace(base_inputs(), target_future_value=1e12)
    solution = solve(inputs, SolveMode.RATE, limits)
    assert solution.bound == "high"
    assert solution.value == 2.0
