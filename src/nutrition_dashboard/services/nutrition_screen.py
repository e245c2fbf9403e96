"""Screen-scoped state for the nutrition tabs."""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from nutrition_dashboard.adapters.api_gateway import ApiGateway, GatewayError
from nutrition_dashboard.domain.nutrition import (
    DailyNutritionSummary,
    Food,
    MacroCalories,
    MacroTotals,
    MealType,
    NutrientProgress,
    NutritionPlan,
    Streak,
)
from nutrition_dashboard.domain.trends import CalorieHistory, CalorieTrend
from nutrition_dashboard.domain.weight import WeightLog, WeightTrend, WeightTrendView
from nutrition_dashboard.screen_tabs import NutritionTab, nutrition_tab
from nutrition_dashboard.services.allergens import (
    ensure_confirmed,
    match_allergens,
    normalize_allergy_ids,
)
from nutrition_dashboard.services.nutrition import (
    all_logs,
    macro_calorie_split,
    macro_progress,
    nutrient_group,
    resolve_targets,
    summarize,
    validate_servings,
)
from nutrition_dashboard.services.scheduling import Debouncer, ScreenLifetime
from nutrition_dashboard.services.trends import (
    summarize_calorie_history,
    weight_trend_view,
)

_logger = logging.getLogger(__name__)


class InvalidWeightError(ValueError):
    """Raised when a weight entry is not a positive number."""


@dataclass
class NutritionViews:
    """Derived views rebuilt after each fetch."""

    summary: DailyNutritionSummary
    targets: MacroTotals
    remaining: MacroTotals
    macros: list[NutrientProgress]
    nutrients: list[NutrientProgress]
    calorie_trend: CalorieTrend
    weight: WeightTrendView
    macro_split: list[MacroCalories]


@dataclass
class NutritionState:
    """Raw data fetched for the nutrition screen."""

    summary: DailyNutritionSummary | None = None
    plan: NutritionPlan | None = None
    streak: Streak | None = None
    weight_history: list[WeightLog] = field(default_factory=list)
    weight_trend: WeightTrend | None = None
    calorie_history: CalorieHistory | None = None
    allergies: list[str] = field(default_factory=list)
    search_results: list[Food] = field(default_factory=list)
    is_searching: bool = False
    errors: dict[str, str] = field(default_factory=dict)


@dataclass
class NutritionScreen:
    """Loads nutrition data and keeps derived views for the four tabs."""

    gateway: ApiGateway
    search_debounce_seconds: float = 0.3
    calorie_history_days: int = 7
    weight_history_days: int = 30
    clock: Callable[[], date] = date.today
    state: NutritionState = field(default_factory=NutritionState)
    views: NutritionViews | None = None
    active_tab: NutritionTab = NutritionTab.DIARY
    lifetime: ScreenLifetime = field(default_factory=ScreenLifetime)
    _search: Debouncer[str] | None = field(default=None, init=False, repr=False)

    async def mount(self) -> None:
        """Mount the screen and load every section."""
        self.lifetime.mount()
        self._search = Debouncer(self.search_debounce_seconds, self._run_search)
        self.lifetime.own(self._search)
        await self.load()

    async def unmount(self) -> None:
        await self.lifetime.unmount()

    async def refresh(self) -> None:
        """Pull-to-refresh."""
        await self.load()

    async def load(self) -> None:
        """Fetch all sections concurrently; a failed section stays empty."""
        fetches = {
            "today": self.gateway.get_today_logs(),
            "plan": self.gateway.calculate_nutrition(),
            "streak": self.gateway.get_streak(),
            "weight_trend": self.gateway.get_weight_trend(),
            "weight_history": self.gateway.get_weight_history(
                self.weight_history_days
            ),
            "calorie_history": self.gateway.get_calorie_history(
                self.calorie_history_days
            ),
            "profile": self.gateway.get_user_profile(),
        }
        results = await asyncio.gather(*fetches.values(), return_exceptions=True)
        self.lifetime.guard(self._apply)(dict(zip(fetches, results, strict=True)))

    def select_tab(self, tab_id: str) -> NutritionTab:
        """Switch tabs; derived views are reused as they are."""
        self.active_tab = nutrition_tab(tab_id)
        return self.active_tab

    def search(self, query: str) -> None:
        """Schedule a debounced food search."""
        if self._search is None:
            raise RuntimeError("Screen is not mounted")
        self._search.trigger(query)

    def allergens_for(self, food: Food) -> list[str]:
        """Return the user's allergies that the food may contain."""
        return match_allergens(food, self.state.allergies)

    async def log_food(
        self,
        food: Food,
        servings: float,
        meal_type: MealType,
        confirmed: bool = False,
    ) -> None:
        """Log a food; foods matching user allergies need confirmation."""
        validate_servings(servings)
        ensure_confirmed(food, self.state.allergies, confirmed)
        await self.gateway.log_food(food.id, servings, meal_type, self.clock())
        _logger.info("Logged %s x%s to %s", food.name, servings, meal_type)
        await self._refresh_today()

    async def delete_log(self, log_id: str) -> None:
        """Remove a log locally, then on the server."""
        summary = self.state.summary
        if summary is not None:
            kept = [log for log in all_logs(summary) if log.id != log_id]
            self.state.summary = summarize(kept, day=summary.date)
            self._rebuild()
        await self.gateway.delete_food_log(log_id)

    async def log_weight(self, weight: float, note: str | None = None) -> WeightLog:
        """Log body weight after rejecting non-positive values."""
        if not math.isfinite(weight) or weight <= 0:
            raise InvalidWeightError("Please enter a valid weight")
        entry = await self.gateway.log_weight(weight, note)
        results = await asyncio.gather(
            self.gateway.get_weight_history(self.weight_history_days),
            self.gateway.get_weight_trend(),
            return_exceptions=True,
        )
        self.lifetime.guard(self._apply)(
            {"weight_history": results[0], "weight_trend": results[1]}
        )
        return entry

    async def _refresh_today(self) -> None:
        results = await asyncio.gather(
            self.gateway.get_today_logs(),
            self.gateway.get_streak(),
            return_exceptions=True,
        )
        self.lifetime.guard(self._apply)({"today": results[0], "streak": results[1]})

    async def _run_search(self, query: str) -> None:
        if not query.strip():
            self.lifetime.guard(self._set_search_results)([])
            return
        self.state.is_searching = True
        try:
            results = await self.gateway.search_food(query)
        except GatewayError as exc:
            _logger.warning("Food search failed: %s", exc.message)
            results = []
        except Exception:
            # Stale results for an older query must not survive a failure.
            _logger.exception("Food search for %r failed", query)
            results = []
        finally:
            self.state.is_searching = False
        self.lifetime.guard(self._set_search_results)(results)

    def _set_search_results(self, results: list[Food]) -> None:
        self.state.search_results = results

    def _apply(self, results: dict[str, object]) -> None:
        state = self.state
        for section, result in results.items():
            if isinstance(result, BaseException):
                _logger.warning("Failed to load %s: %s", section, result)
                state.errors[section] = str(result)
                continue
            state.errors.pop(section, None)
            if section == "today":
                state.summary = result
            elif section == "plan":
                state.plan = result
            elif section == "streak":
                state.streak = result
            elif section == "weight_trend":
                state.weight_trend = result
            elif section == "weight_history":
                state.weight_history = result
            elif section == "calorie_history":
                state.calorie_history = result
            elif section == "profile":
                state.allergies = normalize_allergy_ids(result.food_allergies)
        self._rebuild()

    def _rebuild(self) -> None:
        state = self.state
        targets = resolve_targets(state.plan)
        weight_points = (
            None if "weight_history" in state.errors else len(state.weight_history)
        )
        summary = summarize(
            all_logs(state.summary) if state.summary else [],
            targets,
            day=state.summary.date if state.summary else self.clock(),
        )
        self.views = NutritionViews(
            summary=summary,
            targets=targets,
            remaining=summary.remaining,
            macros=macro_progress(summary.totals, targets),
            nutrients=nutrient_group(summary),
            calorie_trend=summarize_calorie_history(
                state.calorie_history, summary.totals.calories, targets.calories
            ),
            weight=weight_trend_view(state.weight_trend, weight_points),
            macro_split=macro_calorie_split(state.plan) if state.plan else [],
        )
