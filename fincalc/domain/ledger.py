from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class CalcStatus(str, Enum):
    """Outcome of a calculation. Every non-OK state is returned, never raised."""

    OK = "ok"
    EMPTY = "empty"
    NO_SOLUTION_IN_RANGE = "no_solution_in_range"
    PAYMENT_TOO_LOW = "payment_too_low"
    NEVER_DEPLETES = "never_depletes"
    PERIOD_CAP_EXCEEDED = "period_cap_exceeded"

    @property
    def message(self) -> Optional[str]:
        return _STATUS_MESSAGES.get(self)


_STATUS_MESSAGES = {
    CalcStatus.EMPTY: "Nothing to calculate for a zero principal or zero term.",
    CalcStatus.NO_SOLUTION_IN_RANGE: "No solution in range for the given target.",
    CalcStatus.PAYMENT_TOO_LOW: "Payment is too low to cover the interest. Loan will never be paid off.",
    CalcStatus.NEVER_DEPLETES: "Growth covers the withdrawal, so the balance does not run out.",
    CalcStatus.PERIOD_CAP_EXCEEDED: "Schedule exceeded the maximum number of periods.",
}


class ShortfallPolicy(str, Enum):
    """What to do when a loan payment does not cover the first period's interest."""

    REJECT = "reject"
    RAISE_TO_MINIMUM = "raise_to_minimum"


@dataclass(frozen=True)
class PeriodRow:
    """One period of a ledger.

    ``amount`` is the cash flow of the period (payment, deposit or
    withdrawal). ``principal`` is the part of it that moved the balance apart
    from interest: principal repaid on a loan, the deposit on an investment,
    or the net draw on a decumulating balance.
    """

    index: int
    amount: float
    interest: float
    principal: float
    balance: float


@dataclass(frozen=True)
class Schedule:
    starting_balance: float
    ending_balance: float
    total_interest: float
    total_principal: float
    total_paid: float
    period_count: int
    final_payment: float
    rows: Tuple[PeriodRow, ...] = field(default_factory=tuple)


EMPTY_SCHEDULE = Schedule(
    starting_balance=0.0,
    ending_balance=0.0,
    total_interest=0.0,
    total_principal=0.0,
    total_paid=0.0,
    period_count=0,
    final_payment=0.0,
)


@dataclass(frozen=True)
class ScheduleResult:
    status: CalcStatus
    schedule: Schedule
    payment: float


@dataclass(frozen=True)
class AnnualBucket:
    year: int
    amount: float
    interest: float
    principal: float
    ending_balance: float
    periods: int
