"""Aggregation of food logs into daily nutrition views."""

import math
from collections.abc import Iterable
from datetime import date

from nutrition_dashboard.domain.nutrition import (
    MEAL_TYPES,
    CompletedWorkout,
    DailyNutritionSummary,
    FoodLog,
    MacroCalories,
    MacroTargets,
    MacroTotals,
    MealType,
    NutrientInfo,
    NutrientProgress,
    NutritionPlan,
)

MICRONUTRIENT_RDA: dict[str, NutrientInfo] = {
    "fiber": NutrientInfo("Fiber", "g", 28),
    "sugar": NutrientInfo("Sugar", "g", 50),
    "sodium": NutrientInfo("Sodium", "mg", 2300),
    "potassium": NutrientInfo("Potassium", "mg", 4700),
    "calcium": NutrientInfo("Calcium", "mg", 1000),
    "magnesium": NutrientInfo("Magnesium", "mg", 420),
    "phosphorus": NutrientInfo("Phosphorus", "mg", 700),
    "iron": NutrientInfo("Iron", "mg", 18),
    "zinc": NutrientInfo("Zinc", "mg", 11),
    "vitaminA": NutrientInfo("Vitamin A", "mcg", 900),
    "vitaminD": NutrientInfo("Vitamin D", "mcg", 20),
    "vitaminC": NutrientInfo("Vitamin C", "mg", 90),
    "vitaminB12": NutrientInfo("Vitamin B12", "mcg", 2.4),
}

NUTRIENT_TAB_KEYS = [
    "fiber",
    "sugar",
    "sodium",
    "potassium",
    "calcium",
    "iron",
    "vitaminC",
    "vitaminD",
]

# Present on every food record, so zero is a real reading.
ALWAYS_ESTIMATED = frozenset({"fiber", "sugar", "sodium"})

DEFAULT_TARGET_CALORIES = 2000
DEFAULT_MACRO_TARGETS = MacroTargets(protein=150, carbs=250, fat=67)

SERVING_STEP = 0.5
MIN_SERVINGS = 0.5

_KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}


class InvalidServingsError(ValueError):
    """Raised when a servings value is not positive."""


def summarize(
    logs: Iterable[FoodLog],
    targets: MacroTotals | None = None,
    day: date | None = None,
) -> DailyNutritionSummary:
    """Bucket logs by meal and compute totals and remaining macros."""
    meals: dict[MealType, list[FoodLog]] = {meal_type: [] for meal_type in MEAL_TYPES}
    count = 0
    for log in logs:
        meals.setdefault(log.meal_type, []).append(log)
        count += 1

    totals = _sum_macros(
        log_macros(log) for bucket in meals.values() for log in bucket
    )
    remaining = compute_remaining(targets, totals) if targets is not None else None
    resolved_day = day or _first_log_date(meals) or date.today()
    return DailyNutritionSummary(
        date=resolved_day,
        meals=meals,
        totals=totals,
        remaining=remaining,
        log_count=count,
    )


def log_macros(log: FoodLog) -> MacroTotals:
    """Return the effective macros of one log."""
    servings = _amount(log.servings)
    food = log.food
    return MacroTotals(
        calories=_amount(food.calories) * servings,
        protein=_amount(food.protein) * servings,
        carbs=_amount(food.carbs) * servings,
        fat=_amount(food.fat) * servings,
    )


def all_logs(summary: DailyNutritionSummary) -> list[FoodLog]:
    """Return every log of a summary in meal order."""
    return [log for bucket in summary.meals.values() for log in bucket]


def meal_calories(logs: Iterable[FoodLog]) -> float:
    """Return the calorie subtotal of a meal bucket."""
    return sum((log_macros(log).calories for log in logs), 0.0)


def compute_remaining(targets: MacroTotals, consumed: MacroTotals) -> MacroTotals:
    """Return targets minus consumed, floored at zero per field."""
    return MacroTotals(
        calories=max(0.0, targets.calories - consumed.calories),
        protein=max(0.0, targets.protein - consumed.protein),
        carbs=max(0.0, targets.carbs - consumed.carbs),
        fat=max(0.0, targets.fat - consumed.fat),
    )


def resolve_targets(plan: NutritionPlan | None) -> MacroTotals:
    """Return the plan targets, or defaults when no plan is loaded."""
    if plan is None:
        return MacroTotals(
            calories=DEFAULT_TARGET_CALORIES,
            protein=DEFAULT_MACRO_TARGETS.protein,
            carbs=DEFAULT_MACRO_TARGETS.carbs,
            fat=DEFAULT_MACRO_TARGETS.fat,
        )
    return MacroTotals(
        calories=plan.target_calories,
        protein=plan.macros.protein,
        carbs=plan.macros.carbs,
        fat=plan.macros.fat,
    )


def percentage(current: float, target: float) -> float:
    """Return current as a percentage of target, capped at 100."""
    if not target or target <= 0 or not math.isfinite(target):
        return 0.0
    value = min(100.0, current / target * 100)
    return value if math.isfinite(value) else 0.0


def nutrient_progress(
    summary: DailyNutritionSummary, key: str
) -> NutrientProgress | None:
    """Return progress of a micronutrient, or None for an unknown key."""
    info = MICRONUTRIENT_RDA.get(key)
    if info is None:
        return None

    current = 0.0
    for bucket in summary.meals.values():
        for log in bucket:
            # Zero or missing servings contribute nothing, as in log_macros.
            multiplier = _amount(log.servings)
            if key in ALWAYS_ESTIMATED:
                amount = getattr(log.food, key)
            else:
                amount = log.food.micronutrients.get(key)
            current += _amount(amount) * multiplier

    return NutrientProgress(
        key=key,
        name=info.name,
        unit=info.unit,
        current=current,
        target=info.target,
        percentage=percentage(current, info.target),
        has_data=current > 0 or key in ALWAYS_ESTIMATED,
    )


def nutrient_group(
    summary: DailyNutritionSummary, keys: Iterable[str] = NUTRIENT_TAB_KEYS
) -> list[NutrientProgress]:
    """Return progress for known nutrients in the requested order."""
    group = []
    for key in keys:
        progress = nutrient_progress(summary, key)
        if progress is not None:
            group.append(progress)
    return group


def macro_progress(
    consumed: MacroTotals, targets: MacroTotals
) -> list[NutrientProgress]:
    """Return calorie and macro progress rows for the nutrients tab."""
    rows = [
        ("calories", "Calories", "kcal", consumed.calories, targets.calories),
        ("protein", "Protein", "g", consumed.protein, targets.protein),
        ("carbs", "Carbs", "g", consumed.carbs, targets.carbs),
        ("fat", "Fat", "g", consumed.fat, targets.fat),
    ]
    return [
        NutrientProgress(
            key=key,
            name=name,
            unit=unit,
            current=current,
            target=target,
            percentage=percentage(current, target),
            has_data=True,
        )
        for key, name, unit, current, target in rows
    ]


def macro_calorie_split(plan: NutritionPlan) -> list[MacroCalories]:
    """Return calories per macro target as a share of target calories."""
    split = []
    for name in ("protein", "carbs", "fat"):
        grams = getattr(plan.macros, name)
        calories = grams * _KCAL_PER_GRAM[name]
        split.append(
            MacroCalories(
                name=name,
                grams=grams,
                calories=calories,
                percentage=percentage(calories, plan.target_calories),
            )
        )
    return split


def exercise_calories(workouts: Iterable[CompletedWorkout], day: date) -> float:
    """Estimate calories burned by workouts completed on a day."""
    burned = 0.0
    for workout in workouts:
        if workout.completed_at is None or workout.completed_at.date() != day:
            continue
        burned += workout.duration_minutes * 5 + workout.total_volume * 0.05
    return burned


def adjust_servings(current: float, delta: float = SERVING_STEP) -> float:
    """Step servings, never going below the minimum."""
    return max(MIN_SERVINGS, current + delta)


def validate_servings(servings: float) -> float:
    """Return servings if positive and finite, otherwise raise."""
    if not math.isfinite(servings) or servings <= 0:
        raise InvalidServingsError(f"Servings must be positive, got {servings}")
    return servings


def format_amount(value: float) -> str:
    """Format a nutrient amount, keeping one decimal below 1."""
    if value >= 1:
        return str(round_half_up(value))
    return f"{value:.1f}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _sum_macros(items: Iterable[MacroTotals]) -> MacroTotals:
    calories = protein = carbs = fat = 0.0
    for item in items:
        calories += item.calories
        protein += item.protein
        carbs += item.carbs
        fat += item.fat
    return MacroTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def _amount(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def _first_log_date(meals: dict[MealType, list[FoodLog]]) -> date | None:
    for bucket in meals.values():
        if bucket:
            return bucket[0].date
    return None
