"""Solve an annuity for whichever one of its values is unknown."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.annuity import (
    effective_rate_per_period,
    future_value,
    payment_for_future_value,
    present_value_for_future_value,
    whole_periods,
)
from fincalc.core.solver import RootStatus, bisect, bisect_integer
from fincalc.domain.ledger import CalcStatus


class SolveMode(str, Enum):
    END_VALUE = "end"
    CONTRIBUTION = "contrib"
    RATE = "rate"
    START_VALUE = "start"
    LENGTH = "length"


@dataclass(frozen=True)
class AnnuityInputs:
    """Everything an inverse problem might need.

    The field matching the active SolveMode is ignored; ``target_future_value``
    is ignored when solving for the end value.
    """

    present_value: float = 0.0
    payment: float = 0.0
    nominal_rate: float = 0.0
    years: float = 0.0
    target_future_value: float = 0.0
    compounding_per_year: int = 1
    periods_per_year: int = 12
    contribute_at_begin: bool = False

    @property
    def rate_per_period(self) -> float:
        return effective_rate_per_period(
            self.nominal_rate, self.compounding_per_year, self.periods_per_year
        )

    @property
    def period_count(self) -> int:
        return whole_periods(self.years * self.periods_per_year)


@dataclass(frozen=True)
class Solution:
    """``value`` is in the unit of the solved field (periods for LENGTH).

    An unreachable length has ``value`` None; ``bound`` names which side of
    the search range a clamped answer sits on.
    """

    mode: SolveMode
    value: Optional[float]
    status: CalcStatus = CalcStatus.OK
    bound: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.status == CalcStatus.OK


def _finite_or_unreachable(mode: SolveMode, value: float) -> Solution:
    if math.isfinite(value):
        return Solution(mode, value)
    return Solution(mode, None, CalcStatus.NO_SOLUTION_IN_RANGE)


def solve_end_value(inputs: AnnuityInputs, limits: Limits = DEFAULT_LIMITS) -> Solution:
    value = future_value(
        inputs.present_value,
        inputs.payment,
        inputs.rate_per_period,
        inputs.period_count,
        inputs.contribute_at_begin,
    )
    return _finite_or_unreachable(SolveMode.END_VALUE, value)


def solve_contribution(inputs: AnnuityInputs, limits: Limits = DEFAULT_LIMITS) -> Solution:
    value = payment_for_future_value(
        inputs.target_future_value,
        inputs.present_value,
        inputs.rate_per_period,
        inputs.period_count,
        inputs.contribute_at_begin,
    )
    return _finite_or_unreachable(SolveMode.CONTRIBUTION, value)


def solve_start_value(inputs: AnnuityInputs, limits: Limits = DEFAULT_LIMITS) -> Solution:
    value = present_value_for_future_value(
        inputs.target_future_value,
        inputs.payment,
        inputs.rate_per_period,
        inputs.period_count,
        inputs.contribute_at_begin,
    )
    return _finite_or_unreachable(SolveMode.START_VALUE, value)


def solve_rate(inputs: AnnuityInputs, limits: Limits = DEFAULT_LIMITS) -> Solution:
    """Nominal annual rate whose future value matches the target."""
    n = inputs.period_count
    if n == 0:
        return Solution(SolveMode.RATE, 0.0)

    def fv_at(rate: float) -> float:
        i = effective_rate_per_period(rate, inputs.compounding_per_year, inputs.periods_per_year)
        return future_value(inputs.present_value, inputs.payment, i, n, inputs.contribute_at_begin)

    result = bisect(
        fv_at,
        inputs.target_future_value,
        limits.rate_bracket_low,
        limits.rate_bracket_high,
        iterations=limits.rate_solver_iterations,
        max_expansions=limits.rate_solver_max_expansions,
        ceiling=limits.rate_bracket_ceiling,
        expand_factor=limits.rate_expand_factor,
    )
    if result.status == RootStatus.BELOW_RANGE:
        return Solution(SolveMode.RATE, result.value, CalcStatus.NO_SOLUTION_IN_RANGE, "low")
    if result.status == RootStatus.ABOVE_RANGE:
        return Solution(SolveMode.RATE, result.value, CalcStatus.NO_SOLUTION_IN_RANGE, "high")
    return Solution(SolveMode.RATE, result.value)


def solve_length(inputs: AnnuityInputs, limits: Limits = DEFAULT_LIMITS) -> Solution:
    """Whole periods needed for the balance to reach the target."""
    pv = inputs.present_value
    pmt = inputs.payment
    target = inputs.target_future_value
    rate = inputs.rate_per_period

    if rate == 0:
        if pv >= target:
            return Solution(SolveMode.LENGTH, 0.0)
        if pmt <= 0:
            return Solution(SolveMode.LENGTH, None, CalcStatus.NO_SOLUTION_IN_RANGE, "high")
        return Solution(SolveMode.LENGTH, float(math.ceil((target - pv) / pmt)))

    result = bisect_integer(
        lambda n: future_value(pv, pmt, rate, n, inputs.contribute_at_begin),
        target,
        0,
        limits.length_bracket_high,
        iterations=limits.length_solver_iterations,
        max_expansions=limits.length_solver_max_expansions,
        ceiling=limits.length_bracket_ceiling,
    )
    if not result.converged:
        return Solution(SolveMode.LENGTH, None, CalcStatus.NO_SOLUTION_IN_RANGE, "high")
    return Solution(SolveMode.LENGTH, float(result.value))


_SOLVERS: Dict[SolveMode, Callable[[AnnuityInputs, Limits], Solution]] = {
    SolveMode.END_VALUE: solve_end_value,
    SolveMode.CONTRIBUTION: solve_contribution,
    SolveMode.RATE: solve_rate,
    SolveMode.START_VALUE: solve_start_value,
    SolveMode.LENGTH: solve_length,
}


def solve(inputs: AnnuityInputs, mode: SolveMode, limits: Limits = DEFAULT_LIMITS) -> Solution:
    return _SOLVERS[SolveMode(mode)](inputs, limits)
