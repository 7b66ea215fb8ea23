"""Supabase repository for meal impact records."""

from dataclasses import asdict, dataclass
from datetime import datetime

from supabase import Client

from metabolic_impact.domain.impact import ImpactLevel, MealImpactRecord, MealImpactResult
from metabolic_impact.domain.meals import GlycemicMetrics, Macronutrients, Meal, MealItem
from metabolic_impact.services.history import ImpactRepository


@dataclass
class SupabaseImpactRepository(ImpactRepository):
    """Supabase implementation for meal impact records."""

    client: Client

    def list_records(self, user_id: str) -> list[MealImpactRecord]:
        """Return a user's records ordered by creation time."""
        response = (
            self.client.table("meal_impacts")
            .select("meal_id, meal_json, impact_json, created_at")
            .eq("user_id", user_id)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def save_record(self, user_id: str, record: MealImpactRecord) -> None:
        """Insert a record row."""
        response = (
            self.client.table("meal_impacts")
            .insert(
                {
                    "user_id": user_id,
                    "meal_id": record.meal_id,
                    "meal_json": _meal_to_json(record.meal),
                    "impact_json": asdict(record.impact),
                    "created_at": record.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal impact record")


def _meal_to_json(meal: Meal) -> dict[str, object]:
    payload = asdict(meal)
    payload["timestamp"] = meal.timestamp.isoformat()
    return payload


def _parse_row(row: dict[str, object]) -> MealImpactRecord:
    meal_raw = row.get("meal_json")
    impact_raw = row.get("impact_json")
    if not isinstance(meal_raw, dict) or not isinstance(impact_raw, dict):
        raise RuntimeError(f"Malformed meal impact row for meal {row.get('meal_id')}")
    meal = _parse_meal(meal_raw)
    return MealImpactRecord(
        meal_id=str(row.get("meal_id") or meal.id),
        meal=meal,
        impact=MealImpactResult(
            baseline=float(impact_raw["baseline"]),
            peak=float(impact_raw["peak"]),
            delta=float(impact_raw["delta"]),
            minutes_to_peak=int(impact_raw["minutes_to_peak"]),
            impact_level=ImpactLevel(impact_raw["impact_level"]),
        ),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _parse_meal(raw: dict[str, object]) -> Meal:
    metrics_raw = raw.get("glycemic_metrics")
    items_raw = raw.get("items") or []
    return Meal(
        id=str(raw["id"]),
        timestamp=datetime.fromisoformat(str(raw["timestamp"])),
        total_macros=_parse_macros(raw["total_macros"]),
        items=[
            MealItem(
                name=str(item.get("name", "")),
                quantity=float(item.get("quantity", 0.0)),
                unit=str(item.get("unit", "")),
                macros=_parse_macros(item["macros"]),
            )
            for item in items_raw
            if isinstance(item, dict)
        ],
        glycemic_metrics=(
            GlycemicMetrics(**metrics_raw) if isinstance(metrics_raw, dict) else None
        ),
        notes=raw.get("notes"),
    )


def _parse_macros(raw: object) -> Macronutrients:
    if not isinstance(raw, dict):
        return Macronutrients(0.0, 0.0, 0.0, 0.0, 0.0)
    saturated_fat = raw.get("saturated_fat")
    return Macronutrients(
        carbohydrates=float(raw.get("carbohydrates", 0.0)),
        sugars=float(raw.get("sugars", 0.0)),
        fiber=float(raw.get("fiber", 0.0)),
        protein=float(raw.get("protein", 0.0)),
        fat=float(raw.get("fat", 0.0)),
        saturated_fat=float(saturated_fat) if saturated_fat is not None else None,
    )
