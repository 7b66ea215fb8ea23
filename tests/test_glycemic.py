"""Tests for glycemic load calculation."""

from dataclasses import replace

from metabolic_impact.domain.meals import GlycemicMetrics
from metabolic_impact.services.glycemic import calculate_glycemic_load, with_glycemic_load
from tests.conftest import make_meal


def test_glycemic_load_uses_net_carbs() -> None:
    meal = make_meal(carbohydrates=40, fiber=10, glycemic_index=50)

    assert calculate_glycemic_load(meal) == 15.0


def test_glycemic_load_none_without_metrics() -> None:
    meal = make_meal(glycemic_index=None)

    assert calculate_glycemic_load(meal) is None


def test_glycemic_load_none_without_index() -> None:
    meal = replace(make_meal(), glycemic_metrics=GlycemicMetrics(glycemic_load=3.0))

    assert calculate_glycemic_load(meal) is None


def test_glycemic_load_rounds_half_up() -> None:
    # 55 * 12.3 / 100 = 6.765
    meal = make_meal(carbohydrates=12.3, fiber=0, glycemic_index=55)

    assert calculate_glycemic_load(meal) == 6.77


def test_glycemic_load_negative_net_carbs_pass_through() -> None:
    meal = make_meal(carbohydrates=5, fiber=10, glycemic_index=40)

    assert calculate_glycemic_load(meal) == -2.0


def test_with_glycemic_load_returns_enriched_copy() -> None:
    meal = make_meal()

    enriched = with_glycemic_load(meal)

    assert enriched.glycemic_metrics is not None
    assert enriched.glycemic_metrics.glycemic_load == 15.0
    assert enriched.glycemic_metrics.glycemic_index == 50
    assert meal.glycemic_metrics == GlycemicMetrics(glycemic_index=50)


def test_with_glycemic_load_keeps_meal_without_index() -> None:
    meal = make_meal(glycemic_index=None)

    assert with_glycemic_load(meal) is meal


def test_glycemic_load_is_idempotent() -> None:
    meal = make_meal(carbohydrates=33.3, fiber=4.1, glycemic_index=62)

    first = calculate_glycemic_load(meal)
    second = calculate_glycemic_load(meal)

    assert first == second
    assert meal.glycemic_metrics == GlycemicMetrics(glycemic_index=62)
