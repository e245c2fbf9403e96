"""Domain models for body weight tracking."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

TrendDirection = Literal["up", "down", "stable", "insufficient_data"]


@dataclass(frozen=True)
class WeightLog:
    """A body weight measurement in kilograms."""

    id: str
    weight: float
    date: date
    note: str | None = None


@dataclass(frozen=True)
class WeightTrend:
    """Server-computed summary over the weight series."""

    current: float | None
    average_7_day: float | None
    average_30_day: float | None
    trend: TrendDirection
    change: float | None


INSUFFICIENT_WEIGHT_TREND = WeightTrend(
    current=None,
    average_7_day=None,
    average_30_day=None,
    trend="insufficient_data",
    change=None,
)


@dataclass(frozen=True)
class WeightTrendView:
    """Presentation-ready weight trend."""

    trend: TrendDirection
    change_text: str
    direction_label: str
    icon: str
    color: str
    current: float | None
    average_7_day: float | None
    average_30_day: float | None
