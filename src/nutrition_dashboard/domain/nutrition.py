"""Nutrition domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

MealType = Literal["breakfast", "lunch", "dinner", "snack"]

MEAL_TYPES: tuple[MealType, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class Food:
    """Reference food data as served by the API."""

    id: str
    name: str
    serving_size: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    category: str | None = None
    micronutrients: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class FoodLog:
    """A single logged consumption of a food."""

    id: str
    food_id: str
    food: Food
    servings: float
    meal_type: MealType
    date: date


@dataclass(frozen=True)
class MacroTotals:
    """Calories plus macronutrients in grams."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class NutritionExplanation:
    """Human readable formulas behind a nutrition plan."""

    bmr_formula: str
    tdee_calculation: str
    calorie_adjustment: str
    macro_rationale: str


@dataclass(frozen=True)
class NutritionPlan:
    """Server-computed calorie and macro targets."""

    bmr: float
    tdee: float
    target_calories: float
    macros: MacroTargets
    goal: str | None = None
    activity_level: str | None = None
    explanation: NutritionExplanation | None = None


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Derived view of one day of food logs."""

    date: date
    meals: dict[MealType, list[FoodLog]]
    totals: MacroTotals
    remaining: MacroTotals | None
    log_count: int


@dataclass(frozen=True)
class NutrientInfo:
    """Recommended daily allowance for a nutrient."""

    name: str
    unit: str
    target: float


@dataclass(frozen=True)
class NutrientProgress:
    """Progress of a nutrient against its daily target."""

    key: str
    name: str
    unit: str
    current: float
    target: float
    percentage: float
    has_data: bool


@dataclass(frozen=True)
class MacroCalories:
    """Calories contributed by one macro target."""

    name: str
    grams: float
    calories: float
    percentage: float


@dataclass(frozen=True)
class Streak:
    """Logging streak counters maintained by the server."""

    current_streak: int
    longest_streak: int
    total_days_logged: int
    last_logged_date: date | None


@dataclass(frozen=True)
class CompletedWorkout:
    """Completed workout used to estimate exercise calories."""

    name: str
    completed_at: datetime | None
    duration_minutes: float
    total_volume: float
