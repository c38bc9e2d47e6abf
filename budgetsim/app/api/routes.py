"""HTTP routes for the Flask API."""

from __future__ import annotations

import datetime as dt
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from budgetsim.config import Settings
from budgetsim.core.loader import SpecificationError, load_sample_simulation, simulation_from_document
from budgetsim.core.simulation import Simulation
from budgetsim.domain.transactions import TransactionError
from budgetsim.schemas.common import ErrorResponse, PingResponse
from budgetsim.schemas.simulation import (
    AccountSummary,
    DayRow,
    SimulationRequest,
    SimulationResponse,
    TransactionSchedule,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class DaysOutOfRange(ValueError):
    pass


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(SpecificationError)
def _handle_specification_error(exc: SpecificationError):
    logger.warning("Rejected simulation request: %s", exc)
    return jsonify(ErrorResponse(error=exc.errors).model_dump()), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(TransactionError)
@api_bp.errorhandler(DaysOutOfRange)
def _handle_bad_request(exc: ValueError):
    logger.warning("Rejected simulation request: %s", exc)
    return jsonify(ErrorResponse(error=[str(exc)]).model_dump()), HTTPStatus.BAD_REQUEST


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _resolve_days(days: Optional[int], start: dt.date) -> int:
    settings = _settings()
    if days is None:
        days = settings.default_days
    elif not 1 <= days <= settings.max_days:
        raise DaysOutOfRange(f"days must be between 1 and {settings.max_days}")
    if dt.date.max - start < dt.timedelta(days=days):
        raise DaysOutOfRange(f"days must end on or before {dt.date.max.isoformat()}")
    return days


def _project(simulation: Simulation, days: int) -> SimulationResponse:
    ordered_ids = sorted(simulation.accounts, key=lambda account_id: account_id.id_val)
    rows = [
        DayRow(
            date=day,
            values={str(account_id.id_val): str(values[account_id]) for account_id in ordered_ids},
        )
        for values, day in simulation.run(days)
    ]
    # transactions are evaluated on the day before each emitted date
    last = simulation.start + dt.timedelta(days=days - 1)
    schedules = [
        TransactionSchedule(
            source=txn.source.id_val,
            sink=txn.sink.id_val,
            value=str(txn.value),
            occurrences=txn.occurrences(simulation.start, last),
        )
        for txn in simulation.transactions
    ]
    return SimulationResponse(
        start=simulation.start,
        accounts=[
            AccountSummary(id=account_id.id_val, name=simulation.accounts[account_id].name)
            for account_id in ordered_ids
        ],
        transactions=schedules,
        days=rows,
    )


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong")
    return jsonify(response.model_dump())


@api_bp.get("/simulation/sample")
def sample_simulation() -> Any:
    """Projection of the built-in sample accounts."""
    raw_days = request.args.get("days")
    try:
        requested = int(raw_days) if raw_days is not None else None
    except ValueError:
        raise DaysOutOfRange(f"days must be an integer, got {raw_days!r}") from None
    sample = load_sample_simulation()
    days = _resolve_days(requested, sample.start)

    response = _project(sample, days)
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/simulation")
def simulation() -> Any:
    """Projection of the accounts and transactions in the request body."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = SimulationRequest.model_validate(raw_payload)
    days = _resolve_days(payload.days, payload.start)
    logger.info(
        "Simulating %d days from %s for %d accounts",
        days,
        payload.start,
        len(payload.accounts),
    )
    response = _project(simulation_from_document(payload), days)
    return jsonify(response.model_dump(mode="json"))
