"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Macronutrients:
    """Macronutrient content in grams."""

    carbohydrates: float
    sugars: float
    fiber: float
    protein: float
    fat: float
    saturated_fat: float | None = None

    @property
    def net_carbohydrates(self) -> float:
        """Carbohydrates minus fiber, negative if fiber was over-reported."""
        return self.carbohydrates - self.fiber


@dataclass(frozen=True)
class GlycemicMetrics:
    """Optional glycemic enrichment for a meal."""

    glycemic_index: float | None = None
    glycemic_load: float | None = None
    estimated_glucose_impact: float | None = None


@dataclass(frozen=True)
class MealItem:
    """A single food entry within a meal."""

    name: str
    quantity: float
    unit: str
    macros: Macronutrients


@dataclass(frozen=True)
class Meal:
    """A logged meal with pre-summed totals."""

    id: str
    timestamp: datetime
    total_macros: Macronutrients
    items: list[MealItem] = field(default_factory=list)
    glycemic_metrics: GlycemicMetrics | None = None
    notes: str | None = None
