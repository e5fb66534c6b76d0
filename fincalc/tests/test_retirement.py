from __future__ import annotations

import pytest

from fincalc.config import Limits
from fincalc.core.annuity import future_value
from fincalc.core.retirement import (
    calculate_nest_egg,
    calculate_payout,
    calculate_savings_needed,
    calculate_withdrawal,
)
from fincalc.domain.ledger import CalcStatus
from fincalc.schemas.retirement import (
    AmountMode,
    NestEggRequest,
    PayoutRequest,
    SavingsNeededRequest,
    WithdrawalRequest,
)


def test_nest_egg_defaults():
    result = calculate_nest_egg(NestEggRequest())

    assert result.status == CalcStatus.OK
    assert result.years_to_retire == 32
    assert result.years_in_retirement == 18
    assert result.income_at_retire == pytest.approx(70000 * 1.03 ** 32, abs=0.01)
    assert result.target_income_annual == pytest.approx(result.income_at_retire * 0.75, abs=0.01)
    assert result.required_nest_egg > 0
    assert result.projected_savings > 30000
    assert result.gap == pytest.approx(result.projected_savings - result.required_nest_egg, abs=0.02)
    assert len(result.annual) == 32


def test_nest_egg_fixed_amounts():
    result = calculate_nest_egg(
        NestEggRequest(
            income_needed_mode=AmountMode.AMOUNT,
            income_needed_amount=40000,
            future_savings_mode=AmountMode.AMOUNT,
            future_savings_amount=0,
            avg_return_pct=0,
            savings_now=1000,
        )
    )
    assert result.target_income_annual == 40000
    assert result.projected_savings == 1000


def test_other_income_can_cover_the_need():
    result = calculate_nest_egg(NestEggRequest(other_income_monthly=1e6))
    assert result.net_needed_annual == 0
    assert result.required_nest_egg == 0


def test_nest_egg_with_no_inflation_uses_nominal_rate():
    result = calculate_nest_egg(
        NestEggRequest(
            income_needed_mode=AmountMode.AMOUNT,
            income_needed_amount=12000,
            avg_return_pct=0,
            inflation_pct=0,
        )
    )
    # 18 years of 1000 a month with no growth
    assert result.required_nest_egg == 216000


def test_nest_egg_ages_out_of_order_clamp_to_zero():
    result = calculate_nest_egg(NestEggRequest(age_now=70, age_retire=65))
    assert result.years_to_retire == 0
    assert result.projected_savings == 30000
    assert result.annual == []


def test_savings_needed_reaches_target():
    request = SavingsNeededRequest()
    result = calculate_savings_needed(request)

    assert result.status == CalcStatus.OK
    assert result.annual_required == pytest.approx(result.monthly_required * 12, abs=0.01)
    reached = future_value(request.savings_now, result.monthly_required, 0.06 / 12, 384)
    assert reached == pytest.approx(600000, abs=10)


def test_savings_needed_is_zero_when_on_track():
    result = calculate_savings_needed(SavingsNeededRequest(savings_now=1e6))
    assert result.monthly_required == 0


def test_savings_needed_with_no_time_left():
    result = calculate_savings_needed(SavingsNeededRequest(age_now=67))
    assert result.status == CalcStatus.EMPTY
    assert result.monthly_required == 0


def test_withdrawal_without_growth_or_inflation():
    result = calculate_withdrawal(WithdrawalRequest(return_pct=0, inflation_pct=0))

    assert result.balance_at_retire == 30000 + 500 * 384
    assert result.monthly_withdrawal_nominal == round(222000 / 216, 2)
    assert result.monthly_withdrawal_real == result.monthly_withdrawal_nominal


def test_withdrawal_inflation_lowers_real_income():
    result = calculate_withdrawal(WithdrawalRequest())
    assert result.status == CalcStatus.OK
    assert result.monthly_withdrawal_real < result.monthly_withdrawal_nominal


def test_withdrawal_with_no_retirement_years():
    result = calculate_withdrawal(WithdrawalRequest(life_expectancy=67))
    assert result.status == CalcStatus.EMPTY
    assert result.monthly_withdrawal_nominal == 0


def test_payout_defaults():
    result = calculate_payout(PayoutRequest())

    assert result.status == CalcStatus.OK
    assert result.months == 184
    assert result.years == pytest.approx(184 / 12)
    assert abs(result.totals.periods - result.months) <= 1
    assert result.totals.ending_balance == 0
    assert len(result.monthly) == result.totals.periods


def test_payout_that_never_runs_out():
    result = calculate_payout(PayoutRequest(withdraw_monthly=2500))

    assert result.status == CalcStatus.NEVER_DEPLETES
    assert result.months is None
    assert result.years is None
    assert result.monthly == []


def test_payout_zero_lump_sum():
    result = calculate_payout(PayoutRequest(lump_sum=0))
    assert result.status == CalcStatus.EMPTY
    assert result.months == 0


def test_payout_cap_from_limits():
    result = calculate_payout(PayoutRequest(), Limits(decumulation_max_periods=60))
    assert result.status == CalcStatus.PERIOD_CAP_EXCEEDED
    assert result.months == 184
    assert result.totals.periods == 60
