"""Caller-side validation for meals and glucose ingestion.

The analysis functions assume well-formed input. Everything here runs at
the boundary, before meals and readings reach the engine.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from metabolic_impact.domain.errors import MealValidationError, ReadingParseError
from metabolic_impact.domain.glucose import GlucoseReading, GlucoseUnit, to_mg_dl
from metabolic_impact.domain.meals import Macronutrients, Meal, MealItem

logger = logging.getLogger(__name__)

TOTALS_TOLERANCE_G = 0.01
MAX_GLYCEMIC_INDEX = 100


def validate_meal(meal: Meal, *, check_totals: bool = False) -> None:
    """Raise MealValidationError if the meal breaks its data contract."""
    problems = _macro_problems("total_macros", meal.total_macros)
    for index, item in enumerate(meal.items):
        if not math.isfinite(item.quantity):
            problems.append(f"items[{index}].quantity is not a finite number")
        elif item.quantity < 0:
            problems.append(f"items[{index}].quantity is negative")
        problems.extend(_macro_problems(f"items[{index}].macros", item.macros))

    metrics = meal.glycemic_metrics
    if metrics is not None and metrics.glycemic_index is not None:
        if not math.isfinite(metrics.glycemic_index) or not (
            0 <= metrics.glycemic_index <= MAX_GLYCEMIC_INDEX
        ):
            problems.append("glycemic_index must be between 0 and 100")

    if check_totals and meal.items:
        summed = sum_item_macros(meal.items)
        for name in ("carbohydrates", "sugars", "fiber", "protein", "fat"):
            declared = getattr(meal.total_macros, name)
            actual = getattr(summed, name)
            if abs(declared - actual) > TOTALS_TOLERANCE_G:
                problems.append(
                    f"total_macros.{name} is {declared} but items sum to {actual}"
                )

    if problems:
        raise MealValidationError(meal.id, problems)


def sum_item_macros(items: Iterable[MealItem]) -> Macronutrients:
    """Sum macros across meal items."""
    total = Macronutrients(0.0, 0.0, 0.0, 0.0, 0.0)
    for item in items:
        macros = item.macros
        saturated_fat = total.saturated_fat
        if macros.saturated_fat is not None:
            saturated_fat = (saturated_fat or 0.0) + macros.saturated_fat
        total = Macronutrients(
            carbohydrates=total.carbohydrates + macros.carbohydrates,
            sugars=total.sugars + macros.sugars,
            fiber=total.fiber + macros.fiber,
            protein=total.protein + macros.protein,
            fat=total.fat + macros.fat,
            saturated_fat=saturated_fat,
        )
    return total


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str) and raw.strip():
        try:
            parsed = datetime.fromisoformat(raw.strip())
        except ValueError as exc:
            raise ReadingParseError(raw, "invalid ISO-8601 timestamp") from exc
    else:
        raise ReadingParseError(raw, "missing timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_glucose_readings(
    rows: Iterable[Mapping[str, object]],
    unit: GlucoseUnit = GlucoseUnit.MG_DL,
) -> list[GlucoseReading]:
    """Convert raw rows to mg/dL readings, skipping rows that don't parse.

    A row's own ``unit`` key overrides the default unit.
    """
    readings: list[GlucoseReading] = []
    for row in rows:
        try:
            readings.append(_parse_reading(row, unit))
        except ReadingParseError as exc:
            logger.warning("Skipping glucose reading: %s", exc)
    return readings


def _parse_reading(row: Mapping[str, object], unit: GlucoseUnit) -> GlucoseReading:
    raw_value = row.get("value")
    if isinstance(raw_value, bool) or not isinstance(raw_value, int | float | str):
        raise ReadingParseError(row, "missing glucose value")
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ReadingParseError(row, "non-numeric glucose value") from exc
    if not math.isfinite(value):
        raise ReadingParseError(row, "glucose value is not finite")

    row_unit = unit
    raw_unit = row.get("unit")
    if raw_unit is not None:
        try:
            row_unit = GlucoseUnit(str(raw_unit))
        except ValueError as exc:
            raise ReadingParseError(row, f"unknown unit {raw_unit!r}") from exc

    return GlucoseReading(
        value=to_mg_dl(value, row_unit),
        timestamp=parse_timestamp(row.get("timestamp")),
    )


def _macro_problems(label: str, macros: Macronutrients) -> list[str]:
    problems = []
    values = {
        "carbohydrates": macros.carbohydrates,
        "sugars": macros.sugars,
        "fiber": macros.fiber,
        "protein": macros.protein,
        "fat": macros.fat,
    }
    if macros.saturated_fat is not None:
        values["saturated_fat"] = macros.saturated_fat
    for name, value in values.items():
        if not math.isfinite(value):
            problems.append(f"{label}.{name} is not a finite number")
        elif value < 0:
            problems.append(f"{label}.{name} is negative")
    if macros.sugars > macros.carbohydrates:
        problems.append(f"{label}.sugars exceed carbohydrates")
    if macros.fiber > macros.carbohydrates:
        problems.append(f"{label}.fiber exceeds carbohydrates")
    return problems
