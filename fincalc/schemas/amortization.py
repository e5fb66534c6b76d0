"""Data contracts for the amortization and payment calculators."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from fincalc.domain.ledger import CalcStatus, ShortfallPolicy
from fincalc.schemas.common import AnnualRowOut, CalcRequest, PeriodRowOut, ScheduleTotals


class AmortizationRequest(CalcRequest):
    """Inputs for a monthly amortization schedule."""

    loan_amount: float = Field(..., ge=0, le=1e15)
    annual_rate_pct: float = Field(
        ...,
        ge=-50,
        le=100,
        description="Nominal annual rate in percent (6 for 6%). Monthly rate is rate / 12.",
    )
    term_years: int = Field(0, ge=0, le=160)
    term_months: int = Field(0, ge=0, le=1920)
    extra_monthly: float = Field(0.0, ge=0, le=1e15, description="Extra principal paid every month.")
    shortfall_policy: ShortfallPolicy = ShortfallPolicy.RAISE_TO_MINIMUM


class AmortizationResponse(BaseModel):
    status: CalcStatus
    message: Optional[str] = None
    base_payment: float
    payment: float
    months: int = Field(..., ge=0)
    totals: ScheduleTotals
    principal_pct: float
    interest_pct: float
    annual: List[AnnualRowOut]
    monthly: List[PeriodRowOut]


class PaymentMode(str, Enum):
    FIXED_TERM = "fixed_term"
    FIXED_PAYMENT = "fixed_payment"


class PaymentRequest(CalcRequest):
    """Either the payment for a term, or the payoff time for a payment."""

    mode: PaymentMode = PaymentMode.FIXED_TERM
    loan_amount: float = Field(..., ge=0, le=1e12)
    annual_rate_pct: float = Field(..., ge=0, le=100)
    term_years: Optional[float] = Field(None, ge=0, le=100)
    monthly_payment: Optional[float] = Field(None, ge=0, le=1e12)

    @model_validator(mode="after")
    def ensure_mode_inputs(self) -> "PaymentRequest":
        if self.mode == PaymentMode.FIXED_TERM and self.term_years is None:
            raise ValueError("term_years is required for fixed_term")
        if self.mode == PaymentMode.FIXED_PAYMENT and self.monthly_payment is None:
            raise ValueError("monthly_payment is required for fixed_payment")
        return self


class PaymentResponse(BaseModel):
    mode: PaymentMode
    status: CalcStatus
    message: Optional[str] = None
    payment: float
    months: int = Field(..., ge=0)
    payoff_years: int = Field(..., ge=0)
    payoff_remainder_months: int = Field(..., ge=0, lt=12)
    total_payments: float
    total_interest: float
    principal_pct: float
    interest_pct: float
    schedule: List[PeriodRowOut]
