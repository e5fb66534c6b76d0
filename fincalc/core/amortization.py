"""Loan amortization with optional extra monthly payments."""

from __future__ import annotations

import logging

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.aggregate import annual_buckets
from fincalc.core.annuity import payment_for_amortizing_loan
from fincalc.core.schedule import amortization_schedule
from fincalc.domain.ledger import EMPTY_SCHEDULE, CalcStatus, ScheduleResult
from fincalc.schemas.amortization import AmortizationRequest, AmortizationResponse
from fincalc.schemas.common import annual_rows, money, period_rows, schedule_totals

logger = logging.getLogger(__name__)


def share_pct(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def calculate_amortization(
    request: AmortizationRequest, limits: Limits = DEFAULT_LIMITS
) -> AmortizationResponse:
    """Monthly schedule for a loan.

    The monthly rate is the APR / 12 (no compounding conversion). The extra
    payment is added to the level payment every month, which shortens the
    schedule rather than lowering the payment.
    """
    months = request.term_years * 12 + request.term_months
    monthly_rate = request.annual_rate_pct / 100 / 12

    base_payment = payment_for_amortizing_loan(request.loan_amount, monthly_rate, months)

    if not request.loan_amount or not months:
        result = ScheduleResult(CalcStatus.EMPTY, EMPTY_SCHEDULE, 0.0)
    else:
        result = amortization_schedule(
            request.loan_amount,
            monthly_rate,
            base_payment + request.extra_monthly,
            policy=request.shortfall_policy,
            max_periods=limits.amortization_max_periods,
            term=months,
        )
    schedule = result.schedule

    logger.info(
        "amortization: %d months at %.4f%%/mo -> %s (%d rows)",
        months,
        monthly_rate * 100,
        result.status.value,
        schedule.period_count,
    )

    return AmortizationResponse(
        status=result.status,
        message=result.status.message,
        base_payment=money(base_payment),
        payment=money(result.payment),
        months=schedule.period_count,
        totals=schedule_totals(schedule),
        principal_pct=share_pct(schedule.total_principal, schedule.total_paid),
        interest_pct=share_pct(schedule.total_interest, schedule.total_paid),
        annual=annual_rows(annual_buckets(schedule.rows)),
        monthly=period_rows(schedule.rows, request.row_limit),
    )
