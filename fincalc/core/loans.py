"""Quick quotes: plain loan, mortgage (PITI), auto loan, simple vs compound interest."""

from __future__ import annotations

import math

from fincalc.core.annuity import growth_factor, payment_for_amortizing_loan
from fincalc.domain.ledger import CalcStatus
from fincalc.schemas.common import money
from fincalc.schemas.loans import (
    AutoLoanQuote,
    AutoLoanRequest,
    InterestQuote,
    InterestRequest,
    LoanQuote,
    LoanRequest,
    MortgageQuote,
    MortgageRequest,
)


def _level_payment(principal: float, annual_rate_pct: float, months: int) -> float:
    return payment_for_amortizing_loan(principal, annual_rate_pct / 100 / 12, months)


def _status(principal: float, months: int) -> CalcStatus:
    return CalcStatus.OK if principal > 0 and months > 0 else CalcStatus.EMPTY


def quote_loan(request: LoanRequest) -> LoanQuote:
    months = request.term_years * 12 + request.term_months
    payment = _level_payment(request.loan_amount, request.annual_rate_pct, months)
    total = payment * months
    status = _status(request.loan_amount, months)
    return LoanQuote(
        status=status,
        months=months,
        monthly_payment=money(payment),
        total_payment=money(total),
        total_interest=money(total - request.loan_amount) if status == CalcStatus.OK else 0.0,
    )


def quote_mortgage(request: MortgageRequest) -> MortgageQuote:
    principal = max(request.house_price - request.down_payment, 0.0)
    months = request.term_years * 12
    principal_interest = _level_payment(principal, request.annual_rate_pct, months)

    monthly_tax = request.property_tax_annual / 12
    monthly_insurance = request.home_insurance_annual / 12
    monthly_pmi = request.pmi_annual / 12
    monthly = principal_interest + monthly_tax + monthly_insurance + monthly_pmi

    status = _status(principal, months)
    return MortgageQuote(
        status=status,
        principal=money(principal),
        monthly_principal_interest=money(principal_interest),
        monthly_tax=money(monthly_tax),
        monthly_insurance=money(monthly_insurance),
        monthly_pmi=money(monthly_pmi),
        monthly_payment=money(monthly),
        total_payments=money(monthly * months),
        total_interest=money(principal_interest * months - principal) if status == CalcStatus.OK else 0.0,
    )


def quote_auto_loan(request: AutoLoanRequest) -> AutoLoanQuote:
    """Sales tax is charged on the price net of down payment and trade-in, and financed."""
    taxable = max(request.vehicle_price - request.down_payment - request.trade_in, 0.0)
    tax = taxable * request.sales_tax_pct / 100
    loan_amount = taxable + tax
    months = request.term_years * 12 + request.term_months

    payment = _level_payment(loan_amount, request.annual_rate_pct, months)
    total = payment * months
    status = _status(loan_amount, months)
    return AutoLoanQuote(
        status=status,
        loan_amount=money(loan_amount),
        tax_amount=money(tax),
        monthly_payment=money(payment),
        total_payment=money(total),
        total_interest=money(total - loan_amount) if status == CalcStatus.OK else 0.0,
    )


def quote_interest(request: InterestRequest) -> InterestQuote:
    years = request.years + request.months / 12 + request.days / 365
    rate = request.annual_rate_pct / 100
    per_year = request.compound.per_year

    simple_interest = request.principal * rate * years
    compound_total = (
        request.principal * growth_factor(rate / per_year, per_year * years) if request.principal else 0.0
    )

    if not math.isfinite(compound_total):
        return InterestQuote(
            status=CalcStatus.NO_SOLUTION_IN_RANGE,
            message="Compound growth exceeds the representable range.",
            years=years,
            simple_interest=money(simple_interest),
            simple_total=money(request.principal + simple_interest),
        )

    return InterestQuote(
        years=years,
        simple_interest=money(simple_interest),
        simple_total=money(request.principal + simple_interest),
        compound_interest=money(compound_total - request.principal),
        compound_total=money(compound_total),
    )
