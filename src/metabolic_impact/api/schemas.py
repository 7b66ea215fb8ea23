"""Pydantic models for impact API payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from metabolic_impact.domain.errors import MealValidationError, ReadingParseError
from metabolic_impact.domain.impact import MealImpactRecord, MealImpactResult
from metabolic_impact.domain.meals import GlycemicMetrics, Macronutrients, Meal, MealItem
from metabolic_impact.services.validation import parse_timestamp


class MacronutrientsPayload(BaseModel):
    """Macronutrients payload in grams."""

    model_config = ConfigDict(allow_inf_nan=False)

    carbohydrates: float
    sugars: float = 0.0
    fiber: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    saturated_fat: float | None = None

    def to_domain(self) -> Macronutrients:
        return Macronutrients(
            carbohydrates=self.carbohydrates,
            sugars=self.sugars,
            fiber=self.fiber,
            protein=self.protein,
            fat=self.fat,
            saturated_fat=self.saturated_fat,
        )


class GlycemicMetricsPayload(BaseModel):
    """Glycemic enrichment payload."""

    model_config = ConfigDict(allow_inf_nan=False)

    glycemic_index: float | None = None
    glycemic_load: float | None = None
    estimated_glucose_impact: float | None = None


class MealItemPayload(BaseModel):
    """Meal item payload."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    quantity: float = 0.0
    unit: str = "g"
    macros: MacronutrientsPayload


class MealPayload(BaseModel):
    """Meal payload with an ISO-8601 timestamp."""

    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    timestamp: str
    items: list[MealItemPayload] = Field(default_factory=list)
    total_macros: MacronutrientsPayload
    glycemic_metrics: GlycemicMetricsPayload | None = None
    notes: str | None = None

    def to_domain(self) -> Meal:
        """Convert to a domain meal; raises MealValidationError on bad timestamps."""
        try:
            timestamp = parse_timestamp(self.timestamp)
        except ReadingParseError as exc:
            raise MealValidationError(
                self.id, [f"timestamp {self.timestamp!r} is not ISO-8601"]
            ) from exc
        metrics = self.glycemic_metrics
        return Meal(
            id=self.id,
            timestamp=timestamp,
            total_macros=self.total_macros.to_domain(),
            items=[
                MealItem(
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    macros=item.macros.to_domain(),
                )
                for item in self.items
            ],
            glycemic_metrics=(
                GlycemicMetrics(**metrics.model_dump()) if metrics else None
            ),
            notes=self.notes,
        )


class GlucoseReadingPayload(BaseModel):
    """Raw glucose reading payload."""

    model_config = ConfigDict(allow_inf_nan=False)

    value: float
    timestamp: str
    unit: str | None = None


class MealImpactRequest(BaseModel):
    """Meal with the glucose readings around it."""

    meal: MealPayload
    readings: list[GlucoseReadingPayload] = Field(default_factory=list)
    unit: str | None = None


class MealImpactResponse(BaseModel):
    """Impact result in mg/dL."""

    baseline: float
    peak: float
    delta: float
    minutes_to_peak: int
    impact_level: str

    @classmethod
    def from_domain(cls, result: MealImpactResult) -> "MealImpactResponse":
        return cls(
            baseline=result.baseline,
            peak=result.peak,
            delta=result.delta,
            minutes_to_peak=result.minutes_to_peak,
            impact_level=result.impact_level.value,
        )


class MealImpactRecordResponse(BaseModel):
    """Stored impact record."""

    meal_id: str
    glycemic_load: float | None
    impact: MealImpactResponse
    created_at: datetime

    @classmethod
    def from_domain(cls, record: MealImpactRecord) -> "MealImpactRecordResponse":
        metrics = record.meal.glycemic_metrics
        return cls(
            meal_id=record.meal_id,
            glycemic_load=metrics.glycemic_load if metrics else None,
            impact=MealImpactResponse.from_domain(record.impact),
            created_at=record.created_at,
        )
