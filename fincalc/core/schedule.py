"""Period-by-period ledgers.

The ``iter_*`` generators yield rows lazily so a caller that only needs
totals never materialises the ledger; ``build_schedule`` folds any row
iterable into a Schedule. Every loop carries a hard period cap.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional

from fincalc.config import DEFAULT_LIMITS
from fincalc.domain.ledger import (
    EMPTY_SCHEDULE,
    CalcStatus,
    PeriodRow,
    Schedule,
    ScheduleResult,
    ShortfallPolicy,
)

logger = logging.getLogger(__name__)

# balances below half a cent are float residue, not debt
SETTLE_TOLERANCE = 0.005
SETTLE_RELATIVE = 1e-12
MINIMUM_NET_REDUCTION = 0.01


def _settle_tolerance(balance: float) -> float:
    return max(SETTLE_TOLERANCE, abs(balance) * SETTLE_RELATIVE)


def build_schedule(
    rows: Iterable[PeriodRow],
    starting_balance: float,
    keep_rows: bool = True,
) -> Schedule:
    kept: List[PeriodRow] = []
    total_interest = 0.0
    total_principal = 0.0
    total_paid = 0.0
    count = 0
    final_payment = 0.0
    ending_balance = starting_balance

    for row in rows:
        total_interest += row.interest
        total_principal += row.principal
        total_paid += row.amount
        final_payment = row.amount
        ending_balance = row.balance
        count += 1
        if keep_rows:
            kept.append(row)

    return Schedule(
        starting_balance=starting_balance,
        ending_balance=ending_balance,
        total_interest=total_interest,
        total_principal=total_principal,
        total_paid=total_paid,
        period_count=count,
        final_payment=final_payment,
        rows=tuple(kept),
    )


# -----------------------------
# Amortizing (loans)
# -----------------------------


def iter_amortization(
    principal: float,
    rate: float,
    payment: float,
    max_periods: int = DEFAULT_LIMITS.amortization_max_periods,
    term: Optional[int] = None,
) -> Iterator[PeriodRow]:
    """Pay ``payment`` each period until the balance reaches zero or the cap.

    When ``term`` is given, period ``term`` pays off whatever residue the
    level payment left behind.
    """
    balance = principal
    tolerance = _settle_tolerance(principal)
    index = 0
    while balance > 0 and index < max_periods:
        index += 1
        interest = 0.0 if rate == 0 else balance * rate
        principal_paid = max(payment - interest, 0.0)
        # last payment only covers what is left
        if principal_paid > balance or balance - principal_paid < tolerance or index == term:
            principal_paid = balance
        balance -= principal_paid
        yield PeriodRow(
            index=index,
            amount=principal_paid + interest,
            interest=interest,
            principal=principal_paid,
            balance=balance,
        )

    if balance > 0:
        logger.warning("amortization stopped at the %d-period cap with %.2f outstanding", max_periods, balance)


def amortization_schedule(
    principal: float,
    rate: float,
    payment: float,
    *,
    policy: ShortfallPolicy = ShortfallPolicy.REJECT,
    max_periods: int = DEFAULT_LIMITS.amortization_max_periods,
    term: Optional[int] = None,
    keep_rows: bool = True,
) -> ScheduleResult:
    """Amortize a loan, resolving a payment that does not cover interest per ``policy``.

    REJECT reports PAYMENT_TOO_LOW with an empty schedule. RAISE_TO_MINIMUM
    lifts the payment to one cent above the first period's interest, which
    guarantees the balance falls every period.

    ``term`` is the scheduled length of a level payment; see iter_amortization.
    """
    if principal <= 0:
        return ScheduleResult(CalcStatus.EMPTY, EMPTY_SCHEDULE, 0.0)

    first_interest = principal * rate
    if rate > 0:
        if ShortfallPolicy(policy) == ShortfallPolicy.RAISE_TO_MINIMUM:
            minimum = first_interest + MINIMUM_NET_REDUCTION
            if payment <= minimum:
                payment = minimum
        elif payment <= first_interest:
            return ScheduleResult(
                CalcStatus.PAYMENT_TOO_LOW,
                replace(EMPTY_SCHEDULE, starting_balance=principal, ending_balance=principal),
                payment,
            )
    if payment <= 0:
        # a zero-rate loan with nothing paid never moves
        return ScheduleResult(
            CalcStatus.PAYMENT_TOO_LOW,
            replace(EMPTY_SCHEDULE, starting_balance=principal, ending_balance=principal),
            payment,
        )

    schedule = build_schedule(
        iter_amortization(principal, rate, payment, max_periods, term),
        principal,
        keep_rows,
    )
    status = CalcStatus.PERIOD_CAP_EXCEEDED if schedule.ending_balance > 0 else CalcStatus.OK
    return ScheduleResult(status, schedule, payment)


# -----------------------------
# Accumulating (investments)
# -----------------------------


def iter_accumulation(
    present_value: float,
    rate: float,
    contribution: float,
    periods: int,
    contribute_at_begin: bool = False,
    contribution_growth: float = 0.0,
    max_periods: int = DEFAULT_LIMITS.accumulation_max_periods,
) -> Iterator[PeriodRow]:
    """Grow a balance over ``periods`` (at most ``max_periods``) with a contribution before or after each period's interest.

    ``contribution_growth`` compounds the contribution itself per period
    (e.g. savings that track a rising income).
    """
    balance = present_value
    deposit = contribution
    for index in range(1, max(0, min(periods, max_periods)) + 1):
        if contribute_at_begin:
            balance += deposit
        interest = balance * rate
        balance += interest
        if not contribute_at_begin:
            balance += deposit
        yield PeriodRow(
            index=index,
            amount=deposit,
            interest=interest,
            principal=deposit,
            balance=balance,
        )
        deposit *= 1 + contribution_growth


def accumulation_schedule(
    present_value: float,
    rate: float,
    contribution: float,
    periods: int,
    contribute_at_begin: bool = False,
    contribution_growth: float = 0.0,
    keep_rows: bool = True,
    max_periods: int = DEFAULT_LIMITS.accumulation_max_periods,
) -> ScheduleResult:
    schedule = build_schedule(
        iter_accumulation(
            present_value,
            rate,
            contribution,
            periods,
            contribute_at_begin,
            contribution_growth,
            max_periods,
        ),
        present_value,
        keep_rows,
    )
    if periods > max_periods:
        logger.warning("accumulation stopped at the %d-period cap of %d requested", max_periods, periods)
        status = CalcStatus.PERIOD_CAP_EXCEEDED
    else:
        status = CalcStatus.OK if schedule.period_count else CalcStatus.EMPTY
    return ScheduleResult(status, schedule, contribution)


# -----------------------------
# Decumulating (retirement payout)
# -----------------------------


def never_depletes(balance: float, rate: float, withdrawal: float) -> bool:
    if balance <= 0:
        return False
    return withdrawal <= 0 or (rate > 0 and withdrawal <= balance * rate)


def iter_decumulation(
    balance: float,
    rate: float,
    withdrawal: float,
    max_periods: int = DEFAULT_LIMITS.decumulation_max_periods,
) -> Iterator[PeriodRow]:
    """Credit interest, then withdraw; the final withdrawal takes whatever is left."""
    tolerance = _settle_tolerance(balance)
    index = 0
    while balance > 0 and index < max_periods:
        index += 1
        interest = balance * rate
        balance += interest
        taken = min(withdrawal, balance)
        if balance - taken < tolerance:
            taken = balance
        balance -= taken
        yield PeriodRow(
            index=index,
            amount=taken,
            interest=interest,
            principal=taken - interest,
            balance=balance,
        )

    if balance > 0:
        logger.warning("decumulation stopped at the %d-period cap with %.2f remaining", max_periods, balance)


def decumulation_schedule(
    balance: float,
    rate: float,
    withdrawal: float,
    *,
    max_periods: int = DEFAULT_LIMITS.decumulation_max_periods,
    keep_rows: bool = True,
) -> ScheduleResult:
    if balance <= 0:
        return ScheduleResult(CalcStatus.EMPTY, EMPTY_SCHEDULE, withdrawal)
    if never_depletes(balance, rate, withdrawal):
        return ScheduleResult(
            CalcStatus.NEVER_DEPLETES,
            replace(EMPTY_SCHEDULE, starting_balance=balance, ending_balance=balance),
            withdrawal,
        )

    schedule = build_schedule(
        iter_decumulation(balance, rate, withdrawal, max_periods),
        balance,
        keep_rows,
    )
    status = CalcStatus.PERIOD_CAP_EXCEEDED if schedule.ending_balance > 0 else CalcStatus.OK
    return ScheduleResult(status, schedule, withdrawal)
