"""Closed-form annuity math.

All functions are pure and total over finite inputs: a zero rate takes the
linear branch, overflow saturates to ``inf`` and an answer that does not
exist as a finite number comes back as ``nan``. Growth is computed through
``log1p``/``expm1`` so every formula stays continuous as the rate goes to 0.
"""

from __future__ import annotations

import math


def whole_periods(n: float) -> int:
    """Round a period count half-up, flooring negatives at zero."""
    if not math.isfinite(n) or n <= 0:
        return 0
    return int(math.floor(n + 0.5))


def effective_rate_per_period(
    nominal_annual_rate: float, compounding_per_year: int, periods_per_year: int
) -> float:
    """i = (1 + r/m)^(m/p) - 1"""
    if nominal_annual_rate == 0:
        return 0.0
    m = max(1, round(compounding_per_year))
    p = max(1, round(periods_per_year))
    base = 1 + nominal_annual_rate / m
    if base <= 0:
        return -1.0
    return math.expm1((m / p) * math.log(base))


def growth_factor(rate: float, n: float) -> float:
    """(1 + rate)^n"""
    if n <= 0:
        return 1.0
    if rate <= -1.0:
        return 0.0
    try:
        return math.exp(n * math.log1p(rate))
    except OverflowError:
        return math.inf


def accumulation_factor(rate: float, n: int) -> float:
    """Sum of (1 + rate)^k for k in [0, n), i.e. ((1 + rate)^n - 1) / rate."""
    if n <= 0:
        return 0.0
    if rate == 0:
        return float(n)
    if rate <= -1.0:
        return -1.0 / rate
    try:
        return math.expm1(n * math.log1p(rate)) / rate
    except OverflowError:
        return math.inf


def discount_factor(rate: float, n: int) -> float:
    """(1 - (1 + rate)^-n) / rate, the present value of 1 per period."""
    if n <= 0:
        return 0.0
    if rate == 0:
        return float(n)
    if rate <= -1.0:
        return math.nan
    try:
        return -math.expm1(-n * math.log1p(rate)) / rate
    except OverflowError:
        return math.inf


def _scaled(amount: float, factor: float) -> float:
    # 0 * inf would be nan; an absent flow contributes nothing
    return 0.0 if amount == 0 else amount * factor


def payment_from_present_value(present_value: float, rate: float, n: float) -> float:
    N = whole_periods(n)
    if N == 0:
        return 0.0
    if rate == 0:
        return present_value / N
    factor = discount_factor(rate, N)
    if not factor or math.isnan(factor):
        return math.nan
    return present_value / factor


def payment_for_amortizing_loan(principal: float, rate_per_period: float, period_count: float) -> float:
    """Level payment that retires ``principal`` in ``period_count`` periods."""
    if not principal or whole_periods(period_count) == 0:
        return 0.0
    return payment_from_present_value(principal, rate_per_period, period_count)


def present_value_of_annuity(payment: float, rate: float, n: float) -> float:
    N = whole_periods(n)
    if N == 0:
        return 0.0
    return _scaled(payment, discount_factor(rate, N))


def future_value(
    present_value: float,
    payment: float,
    rate: float,
    n: float,
    contribute_at_begin: bool = False,
) -> float:
    """Compound ``present_value`` and a level ``payment`` stream over ``n`` periods.

    With ``contribute_at_begin`` each payment earns one extra period of
    interest (annuity due).
    """
    N = whole_periods(n)
    if N == 0:
        return present_value
    due = 1 + rate if contribute_at_begin else 1.0
    return _scaled(present_value, growth_factor(rate, N)) + _scaled(
        payment, accumulation_factor(rate, N) * due
    )


def payment_for_future_value(
    target: float,
    present_value: float,
    rate: float,
    n: float,
    contribute_at_begin: bool = False,
) -> float:
    """Contribution per period that grows ``present_value`` into ``target``."""
    N = whole_periods(n)
    if N == 0:
        return 0.0
    if rate == 0:
        return (target - present_value) / N
    due = 1 + rate if contribute_at_begin else 1.0
    denominator = accumulation_factor(rate, N) * due
    if denominator == 0 or not math.isfinite(denominator):
        return math.nan
    return (target - _scaled(present_value, growth_factor(rate, N))) / denominator


def present_value_for_future_value(
    target: float,
    payment: float,
    rate: float,
    n: float,
    contribute_at_begin: bool = False,
) -> float:
    """Starting amount that, with ``payment`` per period, grows into ``target``."""
    N = whole_periods(n)
    if N == 0:
        return target
    if rate == 0:
        return target - payment * N
    growth = growth_factor(rate, N)
    if growth == 0 or not math.isfinite(growth):
        return math.nan
    due = 1 + rate if contribute_at_begin else 1.0
    return (target - _scaled(payment, accumulation_factor(rate, N) * due)) / growth


def periods_to_deplete(balance: float, withdrawal: float, rate: float) -> float:
    """Whole periods until ``withdrawal`` (taken after interest) exhausts ``balance``.

    Returns ``math.inf`` when the balance never runs out.
    """
    if balance <= 0:
        return 0.0
    if withdrawal <= 0:
        return math.inf
    if rate <= -1.0:
        return 1.0
    if rate == 0:
        return float(math.ceil(balance / withdrawal))
    shortfall = withdrawal - balance * rate
    if shortfall <= 0:
        return math.inf
    periods = math.log(withdrawal / shortfall) / math.log1p(rate)
    # tolerate float noise when the answer is an exact whole number
    return float(max(1, math.ceil(periods - 1e-9)))
