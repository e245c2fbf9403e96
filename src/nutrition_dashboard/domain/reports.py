"""Domain models for daily reports and injury risk."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

RiskLevel = Literal["low", "moderate", "high", "very_high"]


@dataclass(frozen=True)
class MuscleRisk:
    """Risk assessment for a single muscle group."""

    muscle_name: str
    risk_level: RiskLevel
    usage_count: int = 0
    hours_since_training: float | None = None
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class InjuryReport:
    """Overall injury risk assessment."""

    overall_risk: RiskLevel
    muscles_at_risk: list[MuscleRisk]
    recommendations: list[str]
    needs_rest_day: bool


@dataclass(frozen=True)
class NutritionDay:
    """Consumed nutrition and targets for a report date."""

    calories: float
    protein: float
    carbs: float
    fat: float
    target_calories: float
    target_protein: float
    target_carbs: float
    target_fat: float
    adherence: float


@dataclass(frozen=True)
class ActivityDay:
    """Activity figures for a report date."""

    steps: int
    calories_burned: float
    water_intake: float
    sleep_hours: float


@dataclass(frozen=True)
class TrainingSession:
    """Single training session summary."""

    name: str
    duration: float
    total_volume: float
    total_sets: int
    total_reps: int
    muscles_worked: list[str]


@dataclass(frozen=True)
class TrainingDay:
    """Training figures for a report date."""

    workouts_completed: int
    total_volume: float
    total_weight: float
    total_reps: int
    muscles_trained: list[str]
    sessions: list[TrainingSession]


@dataclass(frozen=True)
class DailyReport:
    """Composite report for one calendar date."""

    date: date
    nutrition: NutritionDay
    activity: ActivityDay
    training: TrainingDay
    injury_risk: InjuryReport


@dataclass(frozen=True)
class SubScores:
    """The four components of the daily score."""

    nutrition: float
    activity: float
    training: float
    recovery: float


@dataclass(frozen=True)
class DailyScore:
    """Composite 0-100 score with its presentation bands."""

    value: int
    label: str
    color: str
    sub_scores: SubScores


@dataclass(frozen=True)
class RecoveryDetails:
    """Presentation of an injury risk report."""

    title: str
    description: str
    icon: str
    color: str
    recommendations: list[str]
    muscles: list[tuple[str, str, str]]
    empty_message: str | None
