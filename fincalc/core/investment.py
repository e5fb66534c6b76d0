"""Investment calculator: solve one unknown, then replay the schedule."""

from __future__ import annotations

import logging
import math

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.aggregate import annual_buckets
from fincalc.core.annuity import whole_periods
from fincalc.core.inverse import AnnuityInputs, SolveMode, solve
from fincalc.core.schedule import accumulation_schedule
from fincalc.domain.ledger import CalcStatus
from fincalc.domain.rates import ContributionFrequency, ContributionSpec, RateSpec
from fincalc.schemas.common import annual_rows, money, period_rows
from fincalc.schemas.investment import InvestmentRequest, InvestmentResponse, InvestmentTotals

logger = logging.getLogger(__name__)


def inputs_from_request(request: InvestmentRequest) -> AnnuityInputs:
    contribution = ContributionSpec(
        amount=request.contribution,
        frequency=request.contribution_frequency,
        timing=request.contribute_at,
    )
    return AnnuityInputs(
        present_value=request.starting_amount,
        payment=contribution.amount,
        nominal_rate=request.return_rate_pct / 100,
        years=request.years,
        target_future_value=request.target_end_amount,
        compounding_per_year=request.compound.per_year,
        periods_per_year=contribution.frequency.per_year,
        contribute_at_begin=contribution.at_begin,
    )


def _solved_money(mode: SolveMode, field: SolveMode, value):
    if mode != field or value is None:
        return None
    return money(value)


def calculate_investment(request: InvestmentRequest, limits: Limits = DEFAULT_LIMITS) -> InvestmentResponse:
    inputs = inputs_from_request(request)
    per_year = inputs.periods_per_year
    mode = SolveMode(request.mode)

    solution = solve(inputs, mode, limits)

    # start from the given values and swap in whatever was solved
    start = inputs.present_value
    contribution = inputs.payment
    nominal_rate = inputs.nominal_rate
    years = inputs.years
    value = solution.value

    if value is not None:
        if mode == SolveMode.CONTRIBUTION:
            contribution = value
        elif mode == SolveMode.START_VALUE:
            start = value
        elif mode == SolveMode.RATE:
            nominal_rate = value
        elif mode == SolveMode.LENGTH:
            years = value / per_year
    elif mode == SolveMode.LENGTH:
        # an unreachable target leaves nothing to replay
        years = 0.0

    rate = RateSpec(nominal_rate, inputs.compounding_per_year).per_period(per_year)
    periods = whole_periods(years * per_year)
    result = accumulation_schedule(
        start,
        rate,
        contribution,
        periods,
        inputs.contribute_at_begin,
        max_periods=limits.accumulation_max_periods,
    )
    schedule = result.schedule
    finite = math.isfinite(schedule.ending_balance) and math.isfinite(schedule.total_interest)

    status = solution.status
    if status == CalcStatus.OK and not finite:
        status = CalcStatus.NO_SOLUTION_IN_RANGE
    elif status == CalcStatus.OK and result.status == CalcStatus.PERIOD_CAP_EXCEEDED:
        status = CalcStatus.PERIOD_CAP_EXCEEDED
    elif status == CalcStatus.OK and not periods and mode != SolveMode.LENGTH:
        status = CalcStatus.EMPTY
    rows = schedule.rows if finite else ()

    logger.info(
        "investment (%s): %s, %d periods, end balance %.2f",
        mode.value,
        status.value,
        periods,
        schedule.ending_balance,
    )

    monthly = request.contribution_frequency == ContributionFrequency.MONTHLY
    return InvestmentResponse(
        mode=mode,
        status=status,
        message=status.message,
        solved_bound=solution.bound,
        rate_per_period=rate,
        periods=periods,
        periods_per_year=per_year,
        totals=InvestmentTotals(
            starting_amount=money(start),
            contributions=money(schedule.total_principal),
            interest=money(schedule.total_interest),
            end_balance=money(schedule.ending_balance),
        )
        if finite
        else None,
        annual=annual_rows(annual_buckets(rows, per_year)),
        monthly=period_rows(rows, request.row_limit) if monthly else [],
        solved_contribution=_solved_money(mode, SolveMode.CONTRIBUTION, value),
        solved_starting_amount=_solved_money(mode, SolveMode.START_VALUE, value),
        solved_rate_pct=value * 100 if mode == SolveMode.RATE and value is not None else None,
        solved_years=value / per_year if mode == SolveMode.LENGTH and value is not None else None,
    )
