"""Tests for calorie and weight trend summaries."""

from datetime import timedelta

from nutrition_dashboard.domain.trends import CalorieDay, CalorieHistory, CalorieStats
from nutrition_dashboard.domain.weight import WeightTrend
from nutrition_dashboard.services.trends import (
    bar_height,
    guard_weight_trend,
    summarize_calorie_history,
    weight_trend_view,
)
from tests.conftest import TODAY

TREND = WeightTrend(
    current=79.6, average_7_day=80.1, average_30_day=81.0, trend="down", change=-1.4
)


def _history(calories: list[float]) -> list[CalorieDay]:
    start = TODAY - timedelta(days=len(calories) - 1)
    return [
        CalorieDay(
            date=start + timedelta(days=index),
            calories=value,
            day_of_week=(start + timedelta(days=index)).strftime("%a"),
        )
        for index, value in enumerate(calories)
    ]


def test_empty_history_builds_placeholder_series() -> None:
    trend = summarize_calorie_history(
        CalorieHistory(history=[], stats=None), 1800, 2000
    )

    assert len(trend.chart_series) == 7
    assert [point.label for point in trend.chart_series] == list("MTWTFSS")
    assert [point.calories for point in trend.chart_series] == [0] * 6 + [1800]
    assert trend.chart_series[-1].is_today
    assert all(point.dimmed for point in trend.chart_series[:6])
    assert not trend.has_real_data
    assert trend.average == 1800
    assert trend.days_tracked == 1
    assert trend.adherence_percent == 0
    assert trend.chart_max == 2500


def test_missing_history_without_intake() -> None:
    trend = summarize_calorie_history(None, 0, 2000)

    assert not trend.has_real_data
    assert trend.average == 0
    assert trend.days_tracked == 0


def test_all_zero_history_counts_as_no_data() -> None:
    history = CalorieHistory(history=_history([0, 0, 0]), stats=None)

    trend = summarize_calorie_history(history, 650, 2000)

    assert not trend.has_real_data
    assert len(trend.chart_series) == 7


def test_real_history_passes_through_backend_stats() -> None:
    stats = CalorieStats(
        average=1950, target=2000, adherence=71, days_tracked=5, total_days=7
    )
    history = CalorieHistory(
        history=_history([2100, 0, 1900, 2800, 1700, 1800, 1200]), stats=stats
    )

    trend = summarize_calorie_history(history, 1200, 2000)

    assert trend.has_real_data
    assert [point.calories for point in trend.chart_series][-1] == 1200
    assert trend.chart_series[-1].is_today
    assert not any(point.dimmed for point in trend.chart_series)
    assert trend.average == 1950
    assert trend.adherence_percent == 71
    assert trend.days_tracked == 5
    assert trend.chart_max == 2800


def test_bar_height() -> None:
    assert bar_height(0, 2500) == 3
    assert bar_height(1250, 2500) == 50


def test_weight_trend_needs_two_points() -> None:
    assert guard_weight_trend(TREND, 1).trend == "insufficient_data"
    assert guard_weight_trend(None).trend == "insufficient_data"
    assert guard_weight_trend(TREND, 2) is TREND


def test_weight_trend_view() -> None:
    view = weight_trend_view(TREND, 12)

    assert view.direction_label == "Losing weight"
    assert view.change_text == "-1.4 kg"
    assert view.color == "success"

    gaining = WeightTrend(
        current=82, average_7_day=81, average_30_day=80, trend="up", change=0.6
    )
    assert weight_trend_view(gaining).change_text == "+0.6 kg"

    insufficient = weight_trend_view(TREND, 0)
    assert insufficient.direction_label == "Stable"
    assert insufficient.change_text == "-- kg"
    assert insufficient.current is None
