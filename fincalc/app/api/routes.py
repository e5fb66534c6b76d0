"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fincalc.config import DEFAULT_LIMITS, Limits
from fincalc.core.amortization import calculate_amortization
from fincalc.core.investment import calculate_investment
from fincalc.core.loans import quote_auto_loan, quote_interest, quote_loan, quote_mortgage
from fincalc.core.payment import calculate_payment
from fincalc.core.ping import get_ping_message, list_calculators
from fincalc.core.retirement import (
    calculate_nest_egg,
    calculate_payout,
    calculate_savings_needed,
    calculate_withdrawal,
)
from fincalc.schemas.amortization import AmortizationRequest, PaymentRequest
from fincalc.schemas.investment import InvestmentRequest
from fincalc.schemas.loans import AutoLoanRequest, InterestRequest, LoanRequest, MortgageRequest
from fincalc.schemas.ping import PingResponse
from fincalc.schemas.retirement import (
    NestEggRequest,
    PayoutRequest,
    SavingsNeededRequest,
    WithdrawalRequest,
)

logger = logging.getLogger(__name__)

LIMITS_KEY = "fincalc.limits"

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected %s: %d validation error(s)", request.path, exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False) or {}


def _limits() -> Limits:
    return current_app.extensions.get(LIMITS_KEY, DEFAULT_LIMITS)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message(), calculators=list_calculators())
    return jsonify(response.model_dump())


@api_bp.post("/calc/amortization")
def amortization() -> Any:
    payload = AmortizationRequest.model_validate(_payload())
    result = calculate_amortization(payload, _limits())
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/payment")
def payment() -> Any:
    payload = PaymentRequest.model_validate(_payload())
    result = calculate_payment(payload, _limits())
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/investment")
def investment() -> Any:
    payload = InvestmentRequest.model_validate(_payload())
    result = calculate_investment(payload, _limits())
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/retirement/nest-egg")
def retirement_nest_egg() -> Any:
    payload = NestEggRequest.model_validate(_payload())
    return jsonify(calculate_nest_egg(payload).model_dump(mode="json"))


@api_bp.post("/calc/retirement/savings-needed")
def retirement_savings_needed() -> Any:
    payload = SavingsNeededRequest.model_validate(_payload())
    return jsonify(calculate_savings_needed(payload).model_dump(mode="json"))


@api_bp.post("/calc/retirement/withdrawal")
def retirement_withdrawal() -> Any:
    payload = WithdrawalRequest.model_validate(_payload())
    return jsonify(calculate_withdrawal(payload).model_dump(mode="json"))


@api_bp.post("/calc/retirement/payout")
def retirement_payout() -> Any:
    payload = PayoutRequest.model_validate(_payload())
    result = calculate_payout(payload, _limits())
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/loan")
def loan() -> Any:
    payload = LoanRequest.model_validate(_payload())
    return jsonify(quote_loan(payload).model_dump(mode="json"))


@api_bp.post("/calc/mortgage")
def mortgage() -> Any:
    payload = MortgageRequest.model_validate(_payload())
    return jsonify(quote_mortgage(payload).model_dump(mode="json"))


@api_bp.post("/calc/auto-loan")
def auto_loan() -> Any:
    payload = AutoLoanRequest.model_validate(_payload())
    return jsonify(quote_auto_loan(payload).model_dump(mode="json"))


@api_bp.post("/calc/interest")
def interest() -> Any:
    payload = InterestRequest.model_validate(_payload())
    return jsonify(quote_interest(payload).model_dump(mode="json"))
