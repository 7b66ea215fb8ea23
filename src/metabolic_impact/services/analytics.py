"""Aggregate statistics over impact history."""

from metabolic_impact.domain.impact import ImpactHistory, ImpactLevel, ImpactSummary
from metabolic_impact.rounding import round_half_up


def analyze_impact_history(history: ImpactHistory) -> ImpactSummary:
    """Summarize average delta, worst meal and high-impact count."""
    records = history.records
    if not records:
        return ImpactSummary(
            average_delta=0, highest_impact_meal=None, high_impact_count=0
        )

    total_delta = 0.0
    highest = records[0]
    high_impact_count = 0
    for record in records:
        total_delta += record.impact.delta
        if record.impact.delta > highest.impact.delta:
            highest = record
        if record.impact.impact_level == ImpactLevel.HIGH:
            high_impact_count += 1

    items = highest.meal.items
    return ImpactSummary(
        average_delta=round_half_up(total_delta / len(records)),
        highest_impact_meal=(items[0].name or None) if items else None,
        high_impact_count=high_impact_count,
    )
