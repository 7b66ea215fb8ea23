"""Domain models for post-meal glycemic impact."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from metabolic_impact.domain.meals import Meal


class ImpactLevel(StrEnum):
    """Severity of a meal's glucose excursion."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class AnalysisStatus(StrEnum):
    """Why a meal can or cannot be analyzed yet."""

    READY = "ready"
    MISSING_BASELINE = "missing_baseline"
    WINDOW_OPEN = "window_open"
    MISSING_POST_MEAL = "missing_post_meal"


@dataclass(frozen=True)
class MealImpactResult:
    """Computed glucose response to a meal, values in mg/dL."""

    baseline: float
    peak: float
    delta: float
    minutes_to_peak: int
    impact_level: ImpactLevel


@dataclass(frozen=True)
class MealImpactRecord:
    """Stored impact result with the meal snapshot it was computed for."""

    meal_id: str
    meal: Meal
    impact: MealImpactResult
    created_at: datetime


@dataclass(frozen=True)
class ImpactHistory:
    """A user's impact records in insertion order."""

    user_id: str
    records: list[MealImpactRecord] = field(default_factory=list)


@dataclass(frozen=True)
class ImpactSummary:
    """Aggregate statistics over an impact history."""

    average_delta: float
    highest_impact_meal: str | None
    high_impact_count: int
