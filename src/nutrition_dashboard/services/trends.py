"""Calorie and weight trend summaries."""

from nutrition_dashboard.domain.trends import (
    CalorieHistory,
    CalorieTrend,
    ChartPoint,
)
from nutrition_dashboard.domain.weight import (
    INSUFFICIENT_WEIGHT_TREND,
    WeightTrend,
    WeightTrendView,
)
from nutrition_dashboard.services.nutrition import round_half_up

PLACEHOLDER_DAYS = 7
PLACEHOLDER_LABELS = ["M", "T", "W", "T", "F", "S", "S"]
MIN_CHART_MAX = 2000
CHART_HEADROOM = 500


def summarize_calorie_history(
    history: CalorieHistory | None,
    consumed_calories: float,
    target_calories: float,
) -> CalorieTrend:
    """Build the calorie chart series and headline figures.

    Real history and its backend stats are passed through untouched. When the
    history is missing, empty or all zero, a seven slot placeholder holds
    only today's consumed calories in the last slot.
    """
    days = history.history if history else []
    has_real_data = bool(days) and any(day.calories > 0 for day in days)

    if has_real_data:
        series = [
            ChartPoint(
                calories=day.calories,
                label=day.day_of_week,
                is_today=index == len(days) - 1,
                dimmed=False,
            )
            for index, day in enumerate(days)
        ]
    else:
        series = [
            ChartPoint(
                calories=consumed_calories if index == PLACEHOLDER_DAYS - 1 else 0,
                label=PLACEHOLDER_LABELS[index],
                is_today=index == PLACEHOLDER_DAYS - 1,
                dimmed=index != PLACEHOLDER_DAYS - 1,
            )
            for index in range(PLACEHOLDER_DAYS)
        ]

    stats = history.stats if history else None
    if stats is not None:
        average = stats.average
        adherence = stats.adherence
        days_tracked = stats.days_tracked
    else:
        average = round_half_up(consumed_calories) if consumed_calories > 0 else 0
        adherence = 0
        days_tracked = 1 if consumed_calories > 0 else 0

    chart_max = max(
        target_calories + CHART_HEADROOM,
        MIN_CHART_MAX,
        *(point.calories for point in series),
    )
    return CalorieTrend(
        chart_series=series,
        average=average,
        adherence_percent=adherence,
        days_tracked=days_tracked,
        has_real_data=has_real_data,
        chart_max=chart_max,
    )


def bar_height(calories: float, chart_max: float) -> float:
    """Return a bar height percentage; empty days keep a 3% stub."""
    if calories <= 0 or chart_max <= 0:
        return 3.0
    return calories / chart_max * 100


def guard_weight_trend(
    trend: WeightTrend | None, data_points: int | None = None
) -> WeightTrend:
    """Return the trend, or the insufficient-data trend for thin series."""
    if trend is None or trend.trend == "insufficient_data":
        return INSUFFICIENT_WEIGHT_TREND
    if data_points is not None and data_points < 2:
        return INSUFFICIENT_WEIGHT_TREND
    return trend


def weight_trend_view(
    trend: WeightTrend | None, data_points: int | None = None
) -> WeightTrendView:
    """Describe a weight trend for display."""
    guarded = guard_weight_trend(trend, data_points)
    if guarded.trend == "down":
        label, icon, color = "Losing weight", "trending-down", "success"
    elif guarded.trend == "up":
        label, icon, color = "Gaining weight", "trending-up", "warning"
    else:
        label, icon, color = "Stable", "remove", "neutral"

    if guarded.change:
        sign = "+" if guarded.change > 0 else ""
        change_text = f"{sign}{guarded.change:.1f} kg"
    else:
        change_text = "-- kg"

    return WeightTrendView(
        trend=guarded.trend,
        change_text=change_text,
        direction_label=label,
        icon=icon,
        color=color,
        current=guarded.current,
        average_7_day=guarded.average_7_day,
        average_30_day=guarded.average_30_day,
    )
