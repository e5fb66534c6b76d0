"""Payment calculator: fixed term -> payment, or fixed payment -> payoff time."""

from __future__ import annotations

import logging

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.amortization import share_pct
from fincalc.core.annuity import payment_for_amortizing_loan, whole_periods
from fincalc.core.schedule import amortization_schedule
from fincalc.domain.ledger import EMPTY_SCHEDULE, CalcStatus, ScheduleResult, ShortfallPolicy
from fincalc.schemas.amortization import PaymentMode, PaymentRequest, PaymentResponse
from fincalc.schemas.common import money, period_rows

logger = logging.getLogger(__name__)


def _fixed_term(request: PaymentRequest, monthly_rate: float) -> ScheduleResult:
    months = whole_periods((request.term_years or 0) * 12)
    if not request.loan_amount or not months:
        return ScheduleResult(CalcStatus.EMPTY, EMPTY_SCHEDULE, 0.0)
    payment = payment_for_amortizing_loan(request.loan_amount, monthly_rate, months)
    return amortization_schedule(
        request.loan_amount,
        monthly_rate,
        payment,
        max_periods=months,
        term=months,
    )


def _fixed_payment(request: PaymentRequest, monthly_rate: float, limits: Limits) -> ScheduleResult:
    if not request.loan_amount:
        return ScheduleResult(CalcStatus.EMPTY, EMPTY_SCHEDULE, request.monthly_payment or 0.0)
    return amortization_schedule(
        request.loan_amount,
        monthly_rate,
        request.monthly_payment or 0.0,
        policy=ShortfallPolicy.REJECT,
        max_periods=limits.payoff_max_periods,
    )


def calculate_payment(request: PaymentRequest, limits: Limits = DEFAULT_LIMITS) -> PaymentResponse:
    monthly_rate = request.annual_rate_pct / 100 / 12

    if request.mode == PaymentMode.FIXED_TERM:
        result = _fixed_term(request, monthly_rate)
    else:
        result = _fixed_payment(request, monthly_rate, limits)

    schedule = result.schedule
    message = result.status.message
    if result.status == CalcStatus.PERIOD_CAP_EXCEEDED and request.mode == PaymentMode.FIXED_PAYMENT:
        message = (
            f"Payoff exceeded {limits.payoff_max_periods} months. "
            "Increase payment to pay off sooner."
        )

    logger.info("payment (%s): %s after %d months", request.mode.value, result.status.value, schedule.period_count)

    # totals only describe a loan that actually pays off
    paid_off = result.status == CalcStatus.OK
    total = schedule.total_paid if paid_off else 0.0
    interest = schedule.total_interest if paid_off else 0.0
    months = schedule.period_count if paid_off else 0

    return PaymentResponse(
        mode=request.mode,
        status=result.status,
        message=message,
        payment=money(result.payment),
        months=months,
        payoff_years=months // 12,
        payoff_remainder_months=months % 12,
        total_payments=money(total),
        total_interest=money(interest),
        principal_pct=share_pct(request.loan_amount if paid_off else 0.0, total),
        interest_pct=share_pct(interest, total),
        schedule=period_rows(schedule.rows if paid_off else (), request.row_limit),
    )
