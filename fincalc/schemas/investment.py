"""Data contracts for the investment calculator."""

from typing import List, Optional

from pydantic import BaseModel, Field

from fincalc.core.inverse import SolveMode
from fincalc.domain.ledger import CalcStatus
from fincalc.domain.rates import Compounding, ContributionFrequency, Timing
from fincalc.schemas.common import AnnualRowOut, CalcRequest, PeriodRowOut


class InvestmentRequest(CalcRequest):
    """Inputs for solving one unknown of a growing investment.

    The field named by ``mode`` is ignored: it is what gets solved.
    ``target_end_amount`` is only read when the end amount is not the unknown.
    """

    mode: SolveMode = SolveMode.END_VALUE
    starting_amount: float = Field(20000, ge=0, le=1e15)
    years: float = Field(10, ge=0, le=200)
    return_rate_pct: float = Field(6, ge=-99, le=1000, description="Nominal annual return in percent.")
    compound: Compounding = Compounding.ANNUALLY
    contribution: float = Field(1000, ge=0, le=1e15, description="Additional contribution per period.")
    contribution_frequency: ContributionFrequency = ContributionFrequency.MONTHLY
    contribute_at: Timing = Timing.END
    target_end_amount: float = Field(198290.4, ge=0, le=1e15)


class InvestmentTotals(BaseModel):
    starting_amount: float
    contributions: float
    interest: float
    end_balance: float


class InvestmentResponse(BaseModel):
    mode: SolveMode
    status: CalcStatus
    message: Optional[str] = None
    solved_starting_amount: Optional[float] = None
    solved_contribution: Optional[float] = None
    solved_rate_pct: Optional[float] = None
    solved_years: Optional[float] = None
    solved_bound: Optional[str] = Field(
        None, description="'low' or 'high' when the answer was clamped to the search range."
    )
    rate_per_period: float
    periods: int = Field(..., ge=0)
    periods_per_year: int
    totals: Optional[InvestmentTotals] = Field(
        None, description="Null when the balance grows past what a float can hold."
    )
    annual: List[AnnualRowOut]
    monthly: List[PeriodRowOut]
