"""Data contracts for the four retirement calculators."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from fincalc.domain.ledger import CalcStatus
from fincalc.schemas.common import AnnualRowOut, CalcRequest, PeriodRowOut, ScheduleTotals


class AmountMode(str, Enum):
    PCT = "pct"
    AMOUNT = "amount"


class NestEggRequest(CalcRequest):
    """How much is needed at retirement, and how much will be there."""

    age_now: int = Field(35, ge=0, le=120)
    age_retire: int = Field(67, ge=0, le=120)
    life_expectancy: int = Field(85, ge=0, le=130)
    income_now: float = Field(70000, ge=0, le=1e12)
    income_increase_pct: float = Field(3, ge=0, le=50)
    income_needed_mode: AmountMode = AmountMode.PCT
    income_needed_pct: float = Field(75, ge=0, le=200, description="Share of the final income needed.")
    income_needed_amount: float = Field(50000, ge=0, le=1e12, description="Annual income needed.")
    avg_return_pct: float = Field(6, ge=-50, le=50)
    inflation_pct: float = Field(3, ge=-20, le=20)
    other_income_monthly: float = Field(0, ge=0, le=1e12)
    savings_now: float = Field(30000, ge=0, le=1e12)
    future_savings_mode: AmountMode = AmountMode.PCT
    future_savings_pct: float = Field(10, ge=0, le=100, description="Share of income saved each month.")
    future_savings_amount: float = Field(500, ge=0, le=1e12, description="Amount saved each month.")


class NestEggResponse(BaseModel):
    status: CalcStatus
    message: Optional[str] = None
    years_to_retire: int
    years_in_retirement: int
    income_at_retire: float
    target_income_annual: float
    net_needed_annual: float
    required_nest_egg: float
    projected_savings: float
    gap: float
    annual: List[AnnualRowOut]


class SavingsNeededRequest(CalcRequest):
    age_now: int = Field(35, ge=0, le=120)
    age_retire: int = Field(67, ge=0, le=120)
    need_at_retire: float = Field(600000, ge=0, le=1e12)
    savings_now: float = Field(30000, ge=0, le=1e12)
    return_pct: float = Field(6, ge=-50, le=50)


class SavingsNeededResponse(BaseModel):
    status: CalcStatus
    message: Optional[str] = None
    years_to_retire: int
    monthly_required: float
    annual_required: float


class WithdrawalRequest(CalcRequest):
    age_now: int = Field(35, ge=0, le=120)
    age_retire: int = Field(67, ge=0, le=120)
    life_expectancy: int = Field(85, ge=0, le=130)
    savings_now: float = Field(30000, ge=0, le=1e12)
    annual_contribution: float = Field(0, ge=0, le=1e12)
    monthly_contribution: float = Field(500, ge=0, le=1e12)
    return_pct: float = Field(6, ge=-50, le=50)
    inflation_pct: float = Field(3, ge=-20, le=20)


class WithdrawalResponse(BaseModel):
    status: CalcStatus
    message: Optional[str] = None
    balance_at_retire: float
    monthly_withdrawal_nominal: float
    monthly_withdrawal_real: float


class PayoutRequest(CalcRequest):
    lump_sum: float = Field(600000, ge=0, le=1e12)
    withdraw_monthly: float = Field(5000, ge=0, le=1e12)
    return_pct: float = Field(6, ge=-50, le=50)


class PayoutResponse(BaseModel):
    status: CalcStatus
    message: Optional[str] = None
    months: Optional[int] = Field(
        None, description="Closed-form months until the balance runs out; null when it never does."
    )
    years: Optional[float] = None
    totals: ScheduleTotals
    annual: List[AnnualRowOut]
    monthly: List[PeriodRowOut]
