"""Retirement calculators.

Four independent questions, all on monthly periods:

  1) nest egg   - what is needed at retirement vs. what current saving produces
  2) savings    - the monthly saving that reaches a target at retirement
  3) withdrawal - the monthly income a projected balance sustains
  4) payout     - how long a lump sum lasts under a fixed withdrawal

Rates on the way in are nominal annual percentages; monthly rates are the
nominal rate / 12. Real (inflation-adjusted) rates use the Fisher relation.
"""

from __future__ import annotations

import logging
import math

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.aggregate import annual_buckets
from fincalc.core.annuity import (
    future_value,
    payment_for_future_value,
    payment_from_present_value,
    periods_to_deplete,
    present_value_of_annuity,
    whole_periods,
)
from fincalc.core.schedule import accumulation_schedule, decumulation_schedule
from fincalc.domain.ledger import CalcStatus
from fincalc.domain.rates import fisher_rate
from fincalc.schemas.common import annual_rows, money, period_rows, schedule_totals
from fincalc.schemas.retirement import (
    AmountMode,
    NestEggRequest,
    NestEggResponse,
    PayoutRequest,
    PayoutResponse,
    SavingsNeededRequest,
    SavingsNeededResponse,
    WithdrawalRequest,
    WithdrawalResponse,
)

logger = logging.getLogger(__name__)

MAX_SPAN_YEARS = 90


def _span(start: int, end: int) -> int:
    return max(0, min(MAX_SPAN_YEARS, end - start))


def _months(years: float) -> int:
    return whole_periods(years * 12)


def _to_nominal(real_amount: float, inflation: float, years: int) -> float:
    return real_amount * (1 + inflation) ** years if years > 0 else real_amount


def _to_real(nominal_amount: float, inflation: float, years: int) -> float:
    return nominal_amount / (1 + inflation) ** years if years > 0 else nominal_amount


def calculate_nest_egg(request: NestEggRequest) -> NestEggResponse:
    """
    Required nest egg: the present value, at retirement, of the net income
    need over the retirement years. The need is deflated to today's money,
    discounted at the real monthly rate, then re-inflated to retirement.

    Projected savings: monthly accumulation at the nominal rate, saving
    either a fixed amount or a share of an income that grows every month.
    """
    years_to_retire = _span(request.age_now, request.age_retire)
    years_in_retirement = _span(request.age_retire, request.life_expectancy)

    income_growth = request.income_increase_pct / 100
    nominal = request.avg_return_pct / 100
    inflation = request.inflation_pct / 100
    real = fisher_rate(nominal, inflation)

    income_at_retire = request.income_now * (1 + income_growth) ** years_to_retire
    if request.income_needed_mode == AmountMode.PCT:
        target_income = income_at_retire * request.income_needed_pct / 100
    else:
        target_income = request.income_needed_amount

    net_needed = max(0.0, target_income - request.other_income_monthly * 12)
    net_needed_real = _to_real(net_needed, inflation, years_to_retire)

    required_real = present_value_of_annuity(
        net_needed_real / 12, real / 12, _months(years_in_retirement)
    )
    required = _to_nominal(required_real, inflation, years_to_retire)

    if request.future_savings_mode == AmountMode.PCT:
        first_saving = request.income_now / 12 * request.future_savings_pct / 100
        saving_growth = (1 + income_growth) ** (1 / 12) - 1
    else:
        first_saving = request.future_savings_amount
        saving_growth = 0.0

    projection = accumulation_schedule(
        request.savings_now,
        nominal / 12,
        first_saving,
        _months(years_to_retire),
        contribute_at_begin=False,
        contribution_growth=saving_growth,
    )
    projected = projection.schedule.ending_balance

    return NestEggResponse(
        status=CalcStatus.OK,
        years_to_retire=years_to_retire,
        years_in_retirement=years_in_retirement,
        income_at_retire=money(income_at_retire),
        target_income_annual=money(target_income),
        net_needed_annual=money(net_needed),
        required_nest_egg=money(required),
        projected_savings=money(projected),
        gap=money(projected - required),
        annual=annual_rows(annual_buckets(projection.schedule.rows)),
    )


def calculate_savings_needed(request: SavingsNeededRequest) -> SavingsNeededResponse:
    years_to_retire = _span(request.age_now, request.age_retire)
    months = _months(years_to_retire)
    if not months:
        return SavingsNeededResponse(
            status=CalcStatus.EMPTY,
            message=CalcStatus.EMPTY.message,
            years_to_retire=years_to_retire,
            monthly_required=0.0,
            annual_required=0.0,
        )

    monthly_rate = request.return_pct / 100 / 12
    # already on track means nothing more to save
    monthly = max(
        0.0,
        payment_for_future_value(request.need_at_retire, request.savings_now, monthly_rate, months),
    )
    return SavingsNeededResponse(
        status=CalcStatus.OK,
        years_to_retire=years_to_retire,
        monthly_required=money(monthly),
        annual_required=money(monthly * 12),
    )


def calculate_withdrawal(request: WithdrawalRequest) -> WithdrawalResponse:
    years_to_retire = _span(request.age_now, request.age_retire)
    years_in_retirement = _span(request.age_retire, request.life_expectancy)

    nominal = request.return_pct / 100
    inflation = request.inflation_pct / 100
    real = fisher_rate(nominal, inflation)
    monthly_contribution = request.monthly_contribution + request.annual_contribution / 12

    balance = future_value(
        request.savings_now, monthly_contribution, nominal / 12, _months(years_to_retire)
    )
    balance_real = _to_real(balance, inflation, years_to_retire)

    withdrawal_real = payment_from_present_value(balance_real, real / 12, _months(years_in_retirement))
    withdrawal_nominal = _to_nominal(withdrawal_real, inflation, years_to_retire)

    status = CalcStatus.OK if years_in_retirement else CalcStatus.EMPTY
    return WithdrawalResponse(
        status=status,
        message=status.message,
        balance_at_retire=money(balance),
        monthly_withdrawal_nominal=money(withdrawal_nominal),
        monthly_withdrawal_real=money(withdrawal_real),
    )


def calculate_payout(request: PayoutRequest, limits: Limits = DEFAULT_LIMITS) -> PayoutResponse:
    """How long ``lump_sum`` lasts, by closed form and by replaying the months."""
    monthly_rate = request.return_pct / 100 / 12
    closed_form = periods_to_deplete(request.lump_sum, request.withdraw_monthly, monthly_rate)

    result = decumulation_schedule(
        request.lump_sum,
        monthly_rate,
        request.withdraw_monthly,
        max_periods=limits.decumulation_max_periods,
    )
    schedule = result.schedule

    months = None if math.isinf(closed_form) else int(closed_form)
    if months is not None and result.status == CalcStatus.OK and abs(months - schedule.period_count) > 1:
        logger.warning(
            "payout closed form (%d months) disagrees with replay (%d months)",
            months,
            schedule.period_count,
        )

    return PayoutResponse(
        status=result.status,
        message=result.status.message,
        months=months,
        years=months / 12 if months is not None else None,
        totals=schedule_totals(schedule),
        annual=annual_rows(annual_buckets(schedule.rows)),
        monthly=period_rows(schedule.rows, request.row_limit),
    )
