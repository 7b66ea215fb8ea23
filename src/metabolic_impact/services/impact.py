"""Post-meal glucose impact analysis."""

from collections.abc import Sequence
from datetime import datetime, timedelta

from metabolic_impact.domain.glucose import GlucoseReading
from metabolic_impact.domain.impact import AnalysisStatus, ImpactLevel, MealImpactResult
from metabolic_impact.domain.meals import Meal
from metabolic_impact.rounding import round_half_up

POST_MEAL_WINDOW = timedelta(minutes=120)
MODERATE_DELTA_MG_DL = 30
HIGH_DELTA_MG_DL = 60


def analyze_meal_impact(
    meal: Meal, glucose_readings: Sequence[GlucoseReading]
) -> MealImpactResult | None:
    """Compare the pre-meal baseline with the peak inside the post-meal window.

    Returns None when there is no reading at or before the meal, or no
    reading within the window. Ties on timestamp (baseline) or value (peak)
    resolve to the first reading in input order.
    """
    baseline = _latest_before(meal.timestamp, glucose_readings)
    if baseline is None:
        return None

    window = _post_meal_window(meal.timestamp, glucose_readings)
    if not window:
        return None

    peak = window[0]
    for reading in window[1:]:
        if reading.value > peak.value:
            peak = reading

    delta = peak.value - baseline.value
    elapsed = (peak.timestamp - meal.timestamp).total_seconds() / 60
    return MealImpactResult(
        baseline=baseline.value,
        peak=peak.value,
        delta=delta,
        minutes_to_peak=int(round_half_up(elapsed, places=0)),
        impact_level=classify_impact(delta),
    )


def classify_impact(delta: float) -> ImpactLevel:
    """Classify a glucose delta in mg/dL."""
    if delta < MODERATE_DELTA_MG_DL:
        return ImpactLevel.LOW
    if delta < HIGH_DELTA_MG_DL:
        return ImpactLevel.MODERATE
    return ImpactLevel.HIGH


def impact_status(
    meal: Meal, glucose_readings: Sequence[GlucoseReading], now: datetime
) -> AnalysisStatus:
    """Explain whether the meal can be analyzed with the readings so far."""
    if _latest_before(meal.timestamp, glucose_readings) is None:
        return AnalysisStatus.MISSING_BASELINE
    if _post_meal_window(meal.timestamp, glucose_readings):
        return AnalysisStatus.READY
    if now <= meal.timestamp + POST_MEAL_WINDOW:
        return AnalysisStatus.WINDOW_OPEN
    return AnalysisStatus.MISSING_POST_MEAL


def _latest_before(
    meal_time: datetime, readings: Sequence[GlucoseReading]
) -> GlucoseReading | None:
    latest: GlucoseReading | None = None
    for reading in readings:
        if reading.timestamp > meal_time:
            continue
        if latest is None or reading.timestamp > latest.timestamp:
            latest = reading
    return latest


def _post_meal_window(
    meal_time: datetime, readings: Sequence[GlucoseReading]
) -> list[GlucoseReading]:
    window_end = meal_time + POST_MEAL_WINDOW
    return [
        reading
        for reading in readings
        if meal_time < reading.timestamp <= window_end
    ]
