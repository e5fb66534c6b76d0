from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fincalc.core.annuity import effective_rate_per_period


class Compounding(str, Enum):
    ANNUALLY = "annually"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"

    @property
    def per_year(self) -> int:
        return _COMPOUNDING_PER_YEAR[self]


_COMPOUNDING_PER_YEAR = {
    Compounding.ANNUALLY: 1,
    Compounding.SEMIANNUALLY: 2,
    Compounding.QUARTERLY: 4,
    Compounding.MONTHLY: 12,
    Compounding.WEEKLY: 52,
    Compounding.DAILY: 365,
}


class ContributionFrequency(str, Enum):
    MONTHLY = "monthly"
    ANNUALLY = "annually"

    @property
    def per_year(self) -> int:
        return 12 if self == ContributionFrequency.MONTHLY else 1


class Timing(str, Enum):
    """Whether a contribution lands before or after the period's interest."""

    BEGIN = "begin"
    END = "end"


@dataclass(frozen=True)
class RateSpec:
    nominal_annual_rate: float
    compounding_per_year: int = 1

    def per_period(self, periods_per_year: int) -> float:
        return effective_rate_per_period(
            self.nominal_annual_rate, self.compounding_per_year, periods_per_year
        )


@dataclass(frozen=True)
class ContributionSpec:
    amount: float = 0.0
    frequency: ContributionFrequency = ContributionFrequency.MONTHLY
    timing: Timing = Timing.END

    @property
    def at_begin(self) -> bool:
        return self.timing == Timing.BEGIN


def fisher_rate(nominal_rate: float, inflation_rate: float) -> float:
    return (1 + nominal_rate) / (1 + inflation_rate) - 1
