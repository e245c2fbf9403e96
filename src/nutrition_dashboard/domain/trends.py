"""Domain models for calorie history trends."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalorieDay:
    """Calories consumed on one day."""

    date: date
    calories: float
    day_of_week: str


@dataclass(frozen=True)
class CalorieStats:
    """Backend-computed statistics over a calorie history."""

    average: float
    target: float
    adherence: float
    days_tracked: int
    total_days: int


@dataclass(frozen=True)
class CalorieHistory:
    """Calorie history response."""

    history: list[CalorieDay]
    stats: CalorieStats | None


@dataclass(frozen=True)
class ChartPoint:
    """One bar of the calorie chart."""

    calories: float
    label: str
    is_today: bool
    dimmed: bool


@dataclass(frozen=True)
class CalorieTrend:
    """Chart series and headline figures for the trends tab."""

    chart_series: list[ChartPoint]
    average: float
    adherence_percent: float
    days_tracked: int
    has_real_data: bool
    chart_max: float
