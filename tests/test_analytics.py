"""Tests for impact history analytics."""

from metabolic_impact.domain.impact import ImpactHistory, ImpactLevel, ImpactSummary
from metabolic_impact.services.analytics import analyze_impact_history
from tests.conftest import make_record


def test_empty_history_returns_zero_summary() -> None:
    summary = analyze_impact_history(ImpactHistory(user_id="u1", records=[]))

    assert summary == ImpactSummary(
        average_delta=0, highest_impact_meal=None, high_impact_count=0
    )


def test_history_aggregates_deltas_and_levels() -> None:
    history = ImpactHistory(
        user_id="u1",
        records=[
            make_record(10, ImpactLevel.LOW, ("apple",)),
            make_record(50, ImpactLevel.MODERATE, ("pasta",)),
            make_record(90, ImpactLevel.HIGH, ("pizza", "soda")),
        ],
    )

    summary = analyze_impact_history(history)

    assert summary.average_delta == 50.0
    assert summary.high_impact_count == 1
    assert summary.highest_impact_meal == "pizza"


def test_average_delta_rounds_to_two_places() -> None:
    history = ImpactHistory(
        user_id="u1",
        records=[
            make_record(10, ImpactLevel.LOW),
            make_record(20, ImpactLevel.LOW),
            make_record(21, ImpactLevel.LOW),
        ],
    )

    assert analyze_impact_history(history).average_delta == 17.0


def test_average_delta_repeating_decimal() -> None:
    history = ImpactHistory(
        user_id="u1",
        records=[
            make_record(10, ImpactLevel.LOW),
            make_record(0, ImpactLevel.LOW),
            make_record(0, ImpactLevel.LOW),
        ],
    )

    assert analyze_impact_history(history).average_delta == 3.33


def test_highest_impact_tie_keeps_first_record() -> None:
    history = ImpactHistory(
        user_id="u1",
        records=[
            make_record(70, ImpactLevel.HIGH, ("bagel",)),
            make_record(70, ImpactLevel.HIGH, ("donut",)),
        ],
    )

    summary = analyze_impact_history(history)

    assert summary.highest_impact_meal == "bagel"
    assert summary.high_impact_count == 2


def test_highest_impact_meal_without_items_is_none() -> None:
    history = ImpactHistory(
        user_id="u1",
        records=[
            make_record(10, ImpactLevel.LOW, ("apple",)),
            make_record(40, ImpactLevel.MODERATE, ()),
        ],
    )

    assert analyze_impact_history(history).highest_impact_meal is None


def test_analyze_impact_history_does_not_mutate_input() -> None:
    records = [make_record(30, ImpactLevel.MODERATE)]
    history = ImpactHistory(user_id="u1", records=records)

    first = analyze_impact_history(history)
    second = analyze_impact_history(history)

    assert first == second
    assert history.records == records
    assert len(history.records) == 1
