"""Impact history service."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from metabolic_impact.domain.glucose import GlucoseReading
from metabolic_impact.domain.impact import (
    ImpactHistory,
    ImpactSummary,
    MealImpactRecord,
)
from metabolic_impact.domain.meals import Meal
from metabolic_impact.services.analytics import analyze_impact_history
from metabolic_impact.services.glycemic import with_glycemic_load
from metabolic_impact.services.impact import analyze_meal_impact, impact_status

logger = logging.getLogger(__name__)


class ImpactRepository(Protocol):
    """Persistence interface for meal impact records."""

    def list_records(self, user_id: str) -> list[MealImpactRecord]:
        """Return a user's records, oldest first."""

    def save_record(self, user_id: str, record: MealImpactRecord) -> None:
        """Append a record to the user's history."""


@dataclass
class ImpactHistoryService:
    """Service that closes out meals and summarizes impact history."""

    repository: ImpactRepository

    def close_out_meal(
        self,
        user_id: str,
        meal: Meal,
        readings: Sequence[GlucoseReading],
        now: datetime | None = None,
    ) -> MealImpactRecord | None:
        """Analyze a meal and store the result; None while still pending."""
        resolved_now = now or datetime.now(tz=UTC)
        enriched = with_glycemic_load(meal)
        impact = analyze_meal_impact(enriched, readings)
        if impact is None:
            logger.info(
                "Meal %s pending analysis: %s",
                meal.id,
                impact_status(meal, readings, resolved_now),
            )
            return None
        record = MealImpactRecord(
            meal_id=meal.id,
            meal=enriched,
            impact=impact,
            created_at=resolved_now,
        )
        self.repository.save_record(user_id, record)
        logger.info(
            "Meal %s closed out with %s impact (delta %.1f)",
            meal.id,
            impact.impact_level,
            impact.delta,
        )
        return record

    def get_history(self, user_id: str) -> ImpactHistory:
        """Return the user's impact history."""
        return ImpactHistory(
            user_id=user_id, records=self.repository.list_records(user_id)
        )

    def summarize(self, user_id: str) -> ImpactSummary:
        """Return aggregate statistics for the user's history."""
        return analyze_impact_history(self.get_history(user_id))
