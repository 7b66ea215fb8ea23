"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from metabolic_impact.config import Settings
from metabolic_impact.containers import AppContainer
from metabolic_impact.domain.glucose import GlucoseReading
from metabolic_impact.domain.impact import (
    ImpactLevel,
    MealImpactRecord,
    MealImpactResult,
)
from metabolic_impact.domain.meals import (
    GlycemicMetrics,
    Macronutrients,
    Meal,
    MealItem,
)
from metabolic_impact.services.history import ImpactHistoryService, ImpactRepository

MEAL_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@dataclass
class InMemoryImpactRepository(ImpactRepository):
    """In-memory impact repository for tests."""

    records: dict[str, list[MealImpactRecord]] = field(default_factory=dict)

    def list_records(self, user_id: str) -> list[MealImpactRecord]:
        return list(self.records.get(user_id, []))

    def save_record(self, user_id: str, record: MealImpactRecord) -> None:
        self.records.setdefault(user_id, []).append(record)


def make_meal(  # noqa: PLR0913
    meal_id: str = "meal-1",
    timestamp: datetime = MEAL_TIME,
    carbohydrates: float = 40,
    fiber: float = 10,
    glycemic_index: float | None = 50,
    item_names: tuple[str, ...] = ("rice",),
) -> Meal:
    """Build a meal whose items split the totals evenly."""
    total = Macronutrients(
        carbohydrates=carbohydrates, sugars=5, fiber=fiber, protein=20, fat=10
    )
    share = len(item_names) or 1
    items = [
        MealItem(
            name=name,
            quantity=100,
            unit="g",
            macros=Macronutrients(
                carbohydrates=carbohydrates / share,
                sugars=5 / share,
                fiber=fiber / share,
                protein=20 / share,
                fat=10 / share,
            ),
        )
        for name in item_names
    ]
    metrics = (
        GlycemicMetrics(glycemic_index=glycemic_index)
        if glycemic_index is not None
        else None
    )
    return Meal(
        id=meal_id,
        timestamp=timestamp,
        total_macros=total,
        items=items,
        glycemic_metrics=metrics,
    )


def reading_at(minutes: float, value: float) -> GlucoseReading:
    """Build a reading relative to MEAL_TIME."""
    return GlucoseReading(value=value, timestamp=MEAL_TIME + timedelta(minutes=minutes))


def make_record(
    delta: float, level: ImpactLevel, item_names: tuple[str, ...] = ("rice",)
) -> MealImpactRecord:
    meal = make_meal(meal_id=f"meal-{delta}", item_names=item_names)
    return MealImpactRecord(
        meal_id=meal.id,
        meal=meal,
        impact=MealImpactResult(
            baseline=100,
            peak=100 + delta,
            delta=delta,
            minutes_to_peak=45,
            impact_level=level,
        ),
        created_at=MEAL_TIME + timedelta(hours=2),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        api_token="api-token",
    )


@pytest.fixture
def impact_repository() -> InMemoryImpactRepository:
    return InMemoryImpactRepository()


@pytest.fixture
def container(
    settings: Settings, impact_repository: InMemoryImpactRepository
) -> AppContainer:
    return AppContainer(
        settings=settings,
        impact_history_service=ImpactHistoryService(impact_repository),
    )
