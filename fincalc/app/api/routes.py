"""HTTP routes for the Flask API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, NamedTuple, Type

from flask import Blueprint, abort, current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from fincalc.core.affordability import calculate_rent
from fincalc.core.debt_payoff import calculate_debt_payoff
from fincalc.core.loans import (
    calculate_amortization,
    calculate_auto_loan,
    calculate_payment,
    calculate_personal_loan,
)
from fincalc.core.ping import get_ping_message, list_calculators
from fincalc.core.retirement import calculate_401k, calculate_ira
from fincalc.core.savings import calculate_college_cost, calculate_savings
from fincalc.domain.common import InvalidInputError
from fincalc.schemas.debt import DebtPayoffRequest
from fincalc.schemas.loans import (
    AmortizationRequest,
    AutoLoanRequest,
    PaymentRequest,
    PersonalLoanRequest,
)
from fincalc.schemas.ping import PingResponse
from fincalc.schemas.rent import RentRequest
from fincalc.schemas.retirement import IRARequest, Retirement401kRequest
from fincalc.schemas.savings import CollegeCostRequest, SavingsRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class Calculator(NamedTuple):
    request_model: Type[BaseModel]
    calculate: Callable[..., BaseModel]
    # whether ``calculate`` accepts the iteration cap
    capped: bool = False


CALCULATORS: Dict[str, Calculator] = {
    "401k": Calculator(Retirement401kRequest, calculate_401k),
    "amortization": Calculator(AmortizationRequest, calculate_amortization, capped=True),
    "auto-loan": Calculator(AutoLoanRequest, calculate_auto_loan, capped=True),
    "college-cost": Calculator(CollegeCostRequest, calculate_college_cost),
    "debt-payoff": Calculator(DebtPayoffRequest, calculate_debt_payoff, capped=True),
    "ira": Calculator(IRARequest, calculate_ira),
    "payment": Calculator(PaymentRequest, calculate_payment, capped=True),
    "personal-loan": Calculator(PersonalLoanRequest, calculate_personal_loan, capped=True),
    "rent": Calculator(RentRequest, calculate_rent),
    "savings": Calculator(SavingsRequest, calculate_savings),
}


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InvalidInputError)
def _handle_invalid_input(exc: InvalidInputError):
    logger.info("rejected calculator input: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message(), calculators=list_calculators(CALCULATORS.keys()))
    return jsonify(response.model_dump())


@api_bp.post("/calc/<name>")
def calculate(name: str) -> Any:
    """Run one calculator against the posted form values."""
    calculator = CALCULATORS.get(name)
    if calculator is None:
        abort(HTTPStatus.NOT_FOUND)

    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = calculator.request_model.model_validate(raw_payload)
    if calculator.capped:
        result = calculator.calculate(payload, max_periods=current_app.config["MAX_PERIODS"])
    else:
        result = calculator.calculate(payload)
    return jsonify(result.model_dump(mode="json"))
