"""Pydantic models for API response payloads."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrition_dashboard.domain.models import (
    ActivityLog,
    ChatMessage,
    Conversation,
    UserProfile,
)
from nutrition_dashboard.domain.nutrition import (
    Food,
    FoodLog,
    MacroTargets,
    MealType,
    NutritionExplanation,
    NutritionPlan,
    Streak,
)
from nutrition_dashboard.domain.reports import (
    ActivityDay,
    DailyReport,
    InjuryReport,
    MuscleRisk,
    NutritionDay,
    RiskLevel,
    TrainingDay,
    TrainingSession,
)
from nutrition_dashboard.domain.trends import CalorieDay, CalorieHistory, CalorieStats
from nutrition_dashboard.domain.weight import TrendDirection, WeightLog, WeightTrend


def parse_day(value: str) -> date:
    """Parse an ISO date or timestamp down to its calendar day."""
    return date.fromisoformat(value[:10])


class ApiModel(BaseModel):
    """Base model accepting camelCase payload keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class FoodPayload(ApiModel):
    """Food payload."""

    id: str | int
    name: str
    serving_size: str | float | None = None
    calories: float | None = 0
    protein: float | None = 0
    carbs: float | None = 0
    fat: float | None = 0
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    category: str | None = None
    micronutrients: dict[str, float | None] | None = None

    def to_domain(self) -> Food:
        return Food(
            id=str(self.id),
            name=self.name,
            serving_size="" if self.serving_size is None else str(self.serving_size),
            calories=self.calories or 0,
            protein=self.protein or 0,
            carbs=self.carbs or 0,
            fat=self.fat or 0,
            fiber=self.fiber,
            sugar=self.sugar,
            sodium=self.sodium,
            category=self.category,
            micronutrients={
                key: value
                for key, value in (self.micronutrients or {}).items()
                if value is not None
            },
        )


class FoodLogPayload(ApiModel):
    """Food log payload."""

    id: str | int
    food_id: str | int
    food: FoodPayload
    servings: float = Field(gt=0)
    meal_type: MealType
    date: str

    def to_domain(self) -> FoodLog:
        return FoodLog(
            id=str(self.id),
            food_id=str(self.food_id),
            food=self.food.to_domain(),
            servings=self.servings,
            meal_type=self.meal_type,
            date=parse_day(self.date),
        )


class MealsPayload(ApiModel):
    """Meal buckets of the today endpoint."""

    breakfast: list[FoodLogPayload] = Field(default_factory=list)
    lunch: list[FoodLogPayload] = Field(default_factory=list)
    dinner: list[FoodLogPayload] = Field(default_factory=list)
    snack: list[FoodLogPayload] = Field(default_factory=list)


class TodayLogsPayload(ApiModel):
    """Response of the today logs endpoint."""

    date: str | None = None
    meals: MealsPayload = Field(default_factory=MealsPayload)

    def logs(self) -> list[FoodLog]:
        return [
            log.to_domain()
            for bucket in (
                self.meals.breakfast,
                self.meals.lunch,
                self.meals.dinner,
                self.meals.snack,
            )
            for log in bucket
        ]


class MacroTargetsPayload(ApiModel):
    protein: float
    carbs: float
    fat: float


class ExplanationPayload(ApiModel):
    bmr_formula: str = ""
    tdee_calculation: str = ""
    calorie_adjustment: str = ""
    macro_rationale: str = ""


class NutritionPlanPayload(ApiModel):
    """Nutrition plan payload."""

    bmr: float
    tdee: float
    target_calories: float
    macros: MacroTargetsPayload
    goal: str | None = None
    activity_level: str | None = None
    explanation: ExplanationPayload | None = None

    def to_domain(self) -> NutritionPlan:
        explanation = None
        if self.explanation is not None:
            explanation = NutritionExplanation(
                bmr_formula=self.explanation.bmr_formula,
                tdee_calculation=self.explanation.tdee_calculation,
                calorie_adjustment=self.explanation.calorie_adjustment,
                macro_rationale=self.explanation.macro_rationale,
            )
        return NutritionPlan(
            bmr=self.bmr,
            tdee=self.tdee,
            target_calories=self.target_calories,
            macros=MacroTargets(
                protein=self.macros.protein,
                carbs=self.macros.carbs,
                fat=self.macros.fat,
            ),
            goal=self.goal,
            activity_level=self.activity_level,
            explanation=explanation,
        )


class WeightLogPayload(ApiModel):
    id: str | int
    weight: float
    date: str
    note: str | None = None

    def to_domain(self) -> WeightLog:
        return WeightLog(
            id=str(self.id),
            weight=self.weight,
            date=parse_day(self.date),
            note=self.note,
        )


class WeightTrendPayload(ApiModel):
    current: float | None = None
    average_7_day: float | None = Field(default=None, alias="average7Day")
    average_30_day: float | None = Field(default=None, alias="average30Day")
    trend: TrendDirection = "insufficient_data"
    change: float | None = None

    def to_domain(self) -> WeightTrend:
        return WeightTrend(
            current=self.current,
            average_7_day=self.average_7_day,
            average_30_day=self.average_30_day,
            trend=self.trend,
            change=self.change,
        )


class CalorieDayPayload(ApiModel):
    date: str
    calories: float = 0
    day_of_week: str = ""


class CalorieStatsPayload(ApiModel):
    average: float = 0
    target: float = 0
    adherence: float = 0
    days_tracked: int = 0
    total_days: int = 0


class CalorieHistoryPayload(ApiModel):
    """Calorie history with backend statistics."""

    history: list[CalorieDayPayload] = Field(default_factory=list)
    stats: CalorieStatsPayload | None = None

    def to_domain(self) -> CalorieHistory:
        stats = None
        if self.stats is not None:
            stats = CalorieStats(
                average=self.stats.average,
                target=self.stats.target,
                adherence=self.stats.adherence,
                days_tracked=self.stats.days_tracked,
                total_days=self.stats.total_days,
            )
        return CalorieHistory(
            history=[
                CalorieDay(
                    date=parse_day(day.date),
                    calories=day.calories,
                    day_of_week=day.day_of_week,
                )
                for day in self.history
            ],
            stats=stats,
        )


class StreakPayload(ApiModel):
    current_streak: int = 0
    longest_streak: int = 0
    total_days_logged: int = 0
    last_logged_date: str | None = None

    def to_domain(self) -> Streak:
        return Streak(
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
            total_days_logged=self.total_days_logged,
            last_logged_date=(
                parse_day(self.last_logged_date) if self.last_logged_date else None
            ),
        )


class MusclePayload(ApiModel):
    name: str | None = None


class MuscleRiskPayload(ApiModel):
    muscle: MusclePayload | None = None
    risk_level: RiskLevel = "low"
    usage_count: int = 0
    hours_since_training: float | None = None
    recommendations: list[str] = Field(default_factory=list)

    def to_domain(self) -> MuscleRisk:
        return MuscleRisk(
            muscle_name=(self.muscle.name if self.muscle else None) or "Unknown",
            risk_level=self.risk_level,
            usage_count=self.usage_count,
            hours_since_training=self.hours_since_training,
            recommendations=list(self.recommendations),
        )


class InjuryReportPayload(ApiModel):
    """Injury risk assessment payload."""

    overall_risk: RiskLevel = "low"
    muscles_at_risk: list[MuscleRiskPayload] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    needs_rest_day: bool = False

    def to_domain(self) -> InjuryReport:
        return InjuryReport(
            overall_risk=self.overall_risk,
            muscles_at_risk=[muscle.to_domain() for muscle in self.muscles_at_risk],
            recommendations=list(self.recommendations),
            needs_rest_day=self.needs_rest_day,
        )


class NutritionDayPayload(ApiModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    target_calories: float = 0
    target_protein: float = 0
    target_carbs: float = 0
    target_fat: float = 0
    adherence: float = 0


class ActivityDayPayload(ApiModel):
    steps: int = 0
    calories_burned: float = 0
    water_intake: float = 0
    sleep_hours: float = 0


class TrainingSessionPayload(ApiModel):
    name: str = ""
    duration: float = 0
    total_volume: float = 0
    total_sets: int = 0
    total_reps: int = 0
    muscles_worked: list[str] = Field(default_factory=list)


class TrainingDayPayload(ApiModel):
    workouts_completed: int = 0
    total_volume: float = 0
    total_weight: float = 0
    total_reps: int = 0
    muscles_trained: list[str] = Field(default_factory=list)
    sessions: list[TrainingSessionPayload] = Field(default_factory=list)


class DailyReportPayload(ApiModel):
    """Daily report payload."""

    date: str
    nutrition: NutritionDayPayload = Field(default_factory=NutritionDayPayload)
    activity: ActivityDayPayload = Field(default_factory=ActivityDayPayload)
    training: TrainingDayPayload = Field(default_factory=TrainingDayPayload)
    injury_risk: InjuryReportPayload = Field(default_factory=InjuryReportPayload)

    def to_domain(self) -> DailyReport:
        return DailyReport(
            date=parse_day(self.date),
            nutrition=NutritionDay(**self.nutrition.model_dump()),
            activity=ActivityDay(**self.activity.model_dump()),
            training=TrainingDay(
                workouts_completed=self.training.workouts_completed,
                total_volume=self.training.total_volume,
                total_weight=self.training.total_weight,
                total_reps=self.training.total_reps,
                muscles_trained=list(self.training.muscles_trained),
                sessions=[
                    TrainingSession(**session.model_dump())
                    for session in self.training.sessions
                ],
            ),
            injury_risk=self.injury_risk.to_domain(),
        )


class ActivityLogPayload(ApiModel):
    date: str
    steps: int = 0
    calories_burned: float = 0
    water_intake: float = 0
    sleep_hours: float = 0

    def to_domain(self) -> ActivityLog:
        return ActivityLog(
            date=parse_day(self.date),
            steps=self.steps,
            calories_burned=self.calories_burned,
            water_intake=self.water_intake,
            sleep_hours=self.sleep_hours,
        )


class UserProfilePayload(ApiModel):
    id: str | int
    name: str | None = None
    food_allergies: list[str] | None = None

    def to_domain(self) -> UserProfile:
        return UserProfile(
            id=str(self.id),
            name=self.name,
            food_allergies=list(self.food_allergies or []),
        )


class ConversationPayload(ApiModel):
    id: str | int
    participant_name: str = ""
    last_message: str | None = None
    last_message_at: datetime | None = None
    unread_count: int = 0

    def to_domain(self) -> Conversation:
        return Conversation(
            id=str(self.id),
            participant_name=self.participant_name,
            last_message=self.last_message,
            last_message_at=self.last_message_at,
            unread_count=self.unread_count,
        )


class ChatMessagePayload(ApiModel):
    id: str | int
    conversation_id: str | int
    sender_id: str | int
    content: str
    created_at: datetime

    def to_domain(self) -> ChatMessage:
        return ChatMessage(
            id=str(self.id),
            conversation_id=str(self.conversation_id),
            sender_id=str(self.sender_id),
            content=self.content,
            created_at=self.created_at,
        )
