"""Glycemic load calculation."""

from dataclasses import replace

from metabolic_impact.domain.meals import GlycemicMetrics, Meal
from metabolic_impact.rounding import round_half_up


def calculate_glycemic_load(meal: Meal) -> float | None:
    """Return the meal's glycemic load, or None without a glycemic index.

    Net carbohydrates are not clamped, so fiber above total carbohydrate
    yields a negative load.
    """
    metrics = meal.glycemic_metrics
    if metrics is None or not metrics.glycemic_index:
        return None
    net_carbs = meal.total_macros.net_carbohydrates
    return round_half_up(metrics.glycemic_index * net_carbs / 100)


def with_glycemic_load(meal: Meal) -> Meal:
    """Return a copy of the meal with its glycemic load filled in."""
    glycemic_load = calculate_glycemic_load(meal)
    if glycemic_load is None:
        return meal
    metrics = meal.glycemic_metrics or GlycemicMetrics()
    return replace(
        meal, glycemic_metrics=replace(metrics, glycemic_load=glycemic_load)
    )
