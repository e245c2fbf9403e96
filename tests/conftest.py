"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date, datetime

import pytest

from nutrition_dashboard.adapters.api_gateway import ApiGateway, GatewayError
from nutrition_dashboard.config import Settings
from nutrition_dashboard.domain.models import (
    ActivityLog,
    ChatMessage,
    Conversation,
    UserProfile,
)
from nutrition_dashboard.domain.nutrition import (
    DailyNutritionSummary,
    Food,
    FoodLog,
    MacroTargets,
    MealType,
    NutritionPlan,
    Streak,
)
from nutrition_dashboard.domain.reports import (
    ActivityDay,
    DailyReport,
    InjuryReport,
    NutritionDay,
    TrainingDay,
)
from nutrition_dashboard.domain.trends import CalorieHistory
from nutrition_dashboard.domain.weight import WeightLog, WeightTrend
from nutrition_dashboard.services.nutrition import summarize

TODAY = date(2026, 3, 18)


def make_food(  # noqa: PLR0913
    name: str = "Chicken breast",
    calories: float = 165,
    protein: float = 31,
    carbs: float = 0,
    fat: float = 3.6,
    food_id: str = "food-1",
    **extra: object,
) -> Food:
    """Build a food with sensible defaults."""
    return Food(
        id=food_id,
        name=name,
        serving_size="100 g",
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        **extra,
    )


def make_log(
    food: Food,
    meal_type: MealType = "breakfast",
    servings: float = 1,
    log_id: str = "log-1",
    day: date = TODAY,
) -> FoodLog:
    """Build a food log for a food."""
    return FoodLog(
        id=log_id,
        food_id=food.id,
        food=food,
        servings=servings,
        meal_type=meal_type,
        date=day,
    )


def make_report(  # noqa: PLR0913
    adherence: float = 90,
    steps: int = 12000,
    workouts_completed: int = 1,
    overall_risk: str = "moderate",
    needs_rest_day: bool = False,
    day: date = TODAY,
) -> DailyReport:
    """Build a daily report with the given score inputs."""
    return DailyReport(
        date=day,
        nutrition=NutritionDay(
            calories=1800,
            protein=120,
            carbs=200,
            fat=60,
            target_calories=2000,
            target_protein=150,
            target_carbs=250,
            target_fat=67,
            adherence=adherence,
        ),
        activity=ActivityDay(
            steps=steps, calories_burned=350, water_intake=2000, sleep_hours=7.5
        ),
        training=TrainingDay(
            workouts_completed=workouts_completed,
            total_volume=0,
            total_weight=0,
            total_reps=0,
            muscles_trained=[],
            sessions=[],
        ),
        injury_risk=make_injury_report(overall_risk, needs_rest_day),
    )


def make_injury_report(
    overall_risk: str = "low", needs_rest_day: bool = False
) -> InjuryReport:
    return InjuryReport(
        overall_risk=overall_risk,
        muscles_at_risk=[],
        recommendations=[],
        needs_rest_day=needs_rest_day,
    )


PLAN = NutritionPlan(
    bmr=1700,
    tdee=2400,
    target_calories=2000,
    macros=MacroTargets(protein=150, carbs=200, fat=70),
)


@dataclass
class FakeApiGateway(ApiGateway):
    """In-memory gateway recording calls and failing on request."""

    logs: list[FoodLog] = field(default_factory=list)
    plan: NutritionPlan = PLAN
    foods: list[Food] = field(default_factory=list)
    weights: list[WeightLog] = field(default_factory=list)
    weight_trend: WeightTrend = field(
        default_factory=lambda: WeightTrend(
            current=80.0,
            average_7_day=80.4,
            average_30_day=81.0,
            trend="down",
            change=-1.2,
        )
    )
    calorie_history: CalorieHistory = field(
        default_factory=lambda: CalorieHistory(history=[], stats=None)
    )
    streak: Streak = field(
        default_factory=lambda: Streak(
            current_streak=3,
            longest_streak=9,
            total_days_logged=20,
            last_logged_date=TODAY,
        )
    )
    profile: UserProfile = field(
        default_factory=lambda: UserProfile(id="user-1", name="Sam", food_allergies=[])
    )
    reports: dict[date, DailyReport] = field(default_factory=dict)
    injury_risk: InjuryReport = field(default_factory=make_injury_report)
    conversations: list[Conversation] = field(default_factory=list)
    messages: list[ChatMessage] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.failing:
            raise GatewayError("network", "Unable to reach server.")

    async def calculate_nutrition(self) -> NutritionPlan:
        self._record("calculate_nutrition")
        return self.plan

    async def get_nutrition_plan(self) -> NutritionPlan:
        self._record("get_nutrition_plan")
        return self.plan

    async def search_food(self, query: str) -> list[Food]:
        self._record(f"search_food:{query}")
        return [food for food in self.foods if query.lower() in food.name.lower()]

    async def log_food(
        self, food_id: str, servings: float, meal_type: MealType, day: date
    ) -> FoodLog | None:
        self._record("log_food")
        food = next(food for food in self.foods if food.id == food_id)
        log = make_log(
            food, meal_type, servings, log_id=f"log-{len(self.logs) + 1}", day=day
        )
        self.logs.append(log)
        return log

    async def delete_food_log(self, log_id: str) -> None:
        self._record("delete_food_log")
        self.logs = [log for log in self.logs if log.id != log_id]

    async def get_today_logs(self) -> DailyNutritionSummary:
        self._record("get_today_logs")
        return summarize(self.logs, day=TODAY)

    async def log_weight(self, weight: float, note: str | None = None) -> WeightLog:
        self._record("log_weight")
        entry = WeightLog(id=f"w-{len(self.weights) + 1}", weight=weight, date=TODAY)
        self.weights.append(entry)
        return entry

    async def get_weight_history(self, days: int) -> list[WeightLog]:
        self._record("get_weight_history")
        return list(self.weights)

    async def get_weight_trend(self, days: int | None = None) -> WeightTrend:
        self._record("get_weight_trend")
        return self.weight_trend

    async def get_calorie_history(self, days: int) -> CalorieHistory:
        self._record("get_calorie_history")
        return self.calorie_history

    async def get_streak(self) -> Streak:
        self._record("get_streak")
        return self.streak

    async def get_activity_log(self, day: date | None = None) -> ActivityLog:
        self._record("get_activity_log")
        return ActivityLog(
            date=day or TODAY,
            steps=0,
            calories_burned=0,
            water_intake=0,
            sleep_hours=0,
        )

    async def get_daily_report(self, day: date) -> DailyReport:
        self._record(f"get_daily_report:{day.isoformat()}")
        return self.reports.get(day) or make_report(day=day)

    async def get_injury_risk(self) -> InjuryReport:
        self._record("get_injury_risk")
        return self.injury_risk

    async def get_user_profile(self) -> UserProfile:
        self._record("get_user_profile")
        return self.profile

    async def list_conversations(self) -> list[Conversation]:
        self._record("list_conversations")
        return list(self.conversations)

    async def get_messages(self, conversation_id: str) -> list[ChatMessage]:
        self._record(f"get_messages:{conversation_id}")
        return list(self.messages)


def make_message(message_id: str, content: str) -> ChatMessage:
    return ChatMessage(
        id=message_id,
        conversation_id="conv-1",
        sender_id="coach-1",
        content=content,
        created_at=datetime(2026, 3, 18, 9, 30),
    )


@pytest.fixture
def settings() -> Settings:
    """Provide test settings."""
    return Settings(
        api_base_url="https://api.test/api",
        api_token="token",
        search_debounce_seconds=0.01,
        conversation_poll_seconds=0.01,
        conversation_list_poll_seconds=0.01,
    )


@pytest.fixture
def gateway() -> FakeApiGateway:
    return FakeApiGateway()
