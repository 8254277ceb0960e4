"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.calculator import CalculationError, run_calculation
from backend.core.health import get_health
from backend.core.rates import to_monthly_rate
from backend.schemas.simulation import MonthlyRateResponse, RateSpec, SimulationRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected payload with %d validation error(s)", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    logger.info("calculation refused: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = get_health(current_app.config["SAFETY_HORIZON_MONTHS"])
    return jsonify(response.model_dump())


@api_bp.post("/calc/simulation")
def simulation() -> Any:
    """Run a projection or one of the target solvers."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    if isinstance(raw_payload, dict):
        raw_payload.setdefault("target", current_app.config["DEFAULT_TARGET"])
    payload = SimulationRequest.model_validate(raw_payload)
    outcome = run_calculation(
        payload,
        safety_horizon=current_app.config["SAFETY_HORIZON_MONTHS"],
    )
    return jsonify(outcome.model_dump(mode="json"))


@api_bp.post("/calc/monthly-rate")
def monthly_rate() -> Any:
    """Convert a yearly or monthly percentage into the effective monthly decimal."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    rate = RateSpec.model_validate(raw_payload)
    response = MonthlyRateResponse(monthlyRate=to_monthly_rate(rate))
    return jsonify(response.model_dump())
