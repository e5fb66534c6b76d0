"""Data contracts for the quick loan and interest quotes."""

from typing import Optional

from pydantic import BaseModel, Field

from fincalc.domain.ledger import CalcStatus
from fincalc.domain.rates import Compounding
from fincalc.schemas.common import CalcRequest


class LoanRequest(CalcRequest):
    loan_amount: float = Field(10000, ge=0, le=1e15)
    annual_rate_pct: float = Field(5, ge=0, le=100)
    term_years: int = Field(5, ge=0, le=100)
    term_months: int = Field(0, ge=0, le=1200)


class LoanQuote(BaseModel):
    status: CalcStatus
    months: int
    monthly_payment: float
    total_payment: float
    total_interest: float


class MortgageRequest(CalcRequest):
    house_price: float = Field(300000, ge=0, le=1e15)
    down_payment: float = Field(60000, ge=0, le=1e15)
    annual_rate_pct: float = Field(6.5, ge=0, le=100)
    term_years: int = Field(30, ge=0, le=100)
    property_tax_annual: float = Field(3600, ge=0, le=1e12)
    home_insurance_annual: float = Field(1200, ge=0, le=1e12)
    pmi_annual: float = Field(0, ge=0, le=1e12)


class MortgageQuote(BaseModel):
    status: CalcStatus
    principal: float
    monthly_principal_interest: float
    monthly_tax: float
    monthly_insurance: float
    monthly_pmi: float
    monthly_payment: float
    total_payments: float
    total_interest: float


class AutoLoanRequest(CalcRequest):
    vehicle_price: float = Field(30000, ge=0, le=1e15)
    down_payment: float = Field(5000, ge=0, le=1e15)
    trade_in: float = Field(0, ge=0, le=1e15)
    sales_tax_pct: float = Field(8, ge=0, le=100)
    annual_rate_pct: float = Field(5, ge=0, le=100)
    term_years: int = Field(5, ge=0, le=100)
    term_months: int = Field(0, ge=0, le=1200)


class AutoLoanQuote(BaseModel):
    status: CalcStatus
    loan_amount: float
    tax_amount: float
    monthly_payment: float
    total_payment: float
    total_interest: float


class InterestRequest(CalcRequest):
    principal: float = Field(10000, ge=0, le=1e15)
    annual_rate_pct: float = Field(5, ge=0, le=1000)
    years: float = Field(5, ge=0, le=200)
    months: float = Field(0, ge=0, le=2400)
    days: float = Field(0, ge=0, le=73000)
    compound: Compounding = Compounding.MONTHLY


class InterestQuote(BaseModel):
    status: CalcStatus = CalcStatus.OK
    message: Optional[str] = None
    years: float
    simple_interest: float
    simple_total: float
    compound_interest: Optional[float] = None
    compound_total: Optional[float] = None
