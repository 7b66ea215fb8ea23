"""Impact analysis endpoints with simple token auth."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse

from metabolic_impact.api.schemas import (
    MealImpactRecordResponse,
    MealImpactRequest,
    MealImpactResponse,
    MealPayload,
)
from metabolic_impact.config import parse_glucose_unit
from metabolic_impact.domain.glucose import GlucoseReading
from metabolic_impact.services.glycemic import calculate_glycemic_load
from metabolic_impact.services.impact import analyze_meal_impact, impact_status
from metabolic_impact.services.validation import parse_glucose_readings, validate_meal

if TYPE_CHECKING:
    from metabolic_impact.containers import AppContainer
    from metabolic_impact.domain.meals import Meal

router = APIRouter(tags=["impact"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/impact/glycemic-load", dependencies=[Depends(require_api_token)])
async def glycemic_load(payload: MealPayload) -> dict[str, float | None]:
    """Return the glycemic load of a meal."""
    meal = payload.to_domain()
    validate_meal(meal)
    return {"glycemic_load": calculate_glycemic_load(meal)}


@router.post(
    "/impact/analyze",
    dependencies=[Depends(require_api_token)],
    response_model=None,
)
async def analyze(
    payload: MealImpactRequest, request: Request
) -> MealImpactResponse | JSONResponse:
    """Analyze a meal against its glucose readings without storing it."""
    container: AppContainer = request.app.state.container
    meal, readings = _resolve_request(payload, container)
    result = analyze_meal_impact(meal, readings)
    if result is None:
        return _pending_response(meal, readings)
    return MealImpactResponse.from_domain(result)


@router.post(
    "/users/{user_id}/impacts",
    dependencies=[Depends(require_api_token)],
    response_model=None,
)
async def close_out_meal(
    user_id: str, payload: MealImpactRequest, request: Request
) -> JSONResponse:
    """Analyze a meal and append the result to the user's history."""
    container: AppContainer = request.app.state.container
    meal, readings = _resolve_request(payload, container)
    record = container.impact_history_service.close_out_meal(user_id, meal, readings)
    if record is None:
        return _pending_response(meal, readings)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=MealImpactRecordResponse.from_domain(record).model_dump(mode="json"),
    )


@router.get(
    "/users/{user_id}/impacts/summary", dependencies=[Depends(require_api_token)]
)
async def impact_summary(user_id: str, request: Request) -> dict[str, object]:
    """Return aggregate statistics for a user's impact history."""
    container: AppContainer = request.app.state.container
    summary = container.impact_history_service.summarize(user_id)
    return {
        "average_delta": summary.average_delta,
        "highest_impact_meal": summary.highest_impact_meal,
        "high_impact_count": summary.high_impact_count,
    }


def _resolve_request(
    payload: MealImpactRequest, container: AppContainer
) -> tuple[Meal, list[GlucoseReading]]:
    try:
        unit = parse_glucose_unit(
            payload.unit or container.settings.default_glucose_unit
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    meal = payload.meal.to_domain()
    validate_meal(meal)
    readings = parse_glucose_readings(
        [reading.model_dump() for reading in payload.readings], unit
    )
    return meal, readings


def _pending_response(meal: Meal, readings: list[GlucoseReading]) -> JSONResponse:
    analysis_status = impact_status(meal, readings, datetime.now(tz=UTC))
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content={"meal_id": meal.id, "status": analysis_status.value},
    )
