"""REST API gateway for the fitness backend."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from nutrition_dashboard.adapters.payloads import (
    ActivityLogPayload,
    CalorieHistoryPayload,
    ChatMessagePayload,
    ConversationPayload,
    DailyReportPayload,
    FoodLogPayload,
    FoodPayload,
    InjuryReportPayload,
    NutritionPlanPayload,
    StreakPayload,
    TodayLogsPayload,
    UserProfilePayload,
    WeightLogPayload,
    WeightTrendPayload,
    parse_day,
)
from nutrition_dashboard.adapters.token_store import TokenStore
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
    MealType,
    NutritionPlan,
    Streak,
)
from nutrition_dashboard.domain.reports import DailyReport, InjuryReport
from nutrition_dashboard.domain.trends import CalorieHistory
from nutrition_dashboard.domain.weight import WeightLog, WeightTrend
from nutrition_dashboard.services.nutrition import summarize

NETWORK_ERROR_MESSAGE = "Unable to reach server. Check your connection."
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server."

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_ASSESSMENT = InjuryReport(
    overall_risk="low",
    muscles_at_risk=[],
    recommendations=["Start tracking your workouts to get injury risk assessments"],
    needs_rest_day=False,
)


class GatewayError(Exception):
    """Failure talking to the API, either transport or an error response."""

    def __init__(
        self, kind: Literal["api", "network"], message: str, status_code: int = 0
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Network failures and server errors are worth retrying."""
        return self.kind == "network" or self.status_code >= 500


class ApiGateway(Protocol):
    """Interface for the remote fitness API."""

    async def calculate_nutrition(self) -> NutritionPlan:
        """Calculate and return the user's nutrition plan."""

    async def get_nutrition_plan(self) -> NutritionPlan:
        """Return the user's nutrition plan."""

    async def search_food(self, query: str) -> list[Food]:
        """Search foods by name."""

    async def log_food(
        self, food_id: str, servings: float, meal_type: MealType, day: date
    ) -> FoodLog | None:
        """Log a food and return the created log when the server sends it."""

    async def delete_food_log(self, log_id: str) -> None:
        """Delete a food log."""

    async def get_today_logs(self) -> DailyNutritionSummary:
        """Return today's food logs grouped by meal."""

    async def log_weight(self, weight: float, note: str | None = None) -> WeightLog:
        """Log a body weight measurement."""

    async def get_weight_history(self, days: int) -> list[WeightLog]:
        """Return weight logs for the last days."""

    async def get_weight_trend(self, days: int | None = None) -> WeightTrend:
        """Return the weight trend summary."""

    async def get_calorie_history(self, days: int) -> CalorieHistory:
        """Return daily calories for the last days with statistics."""

    async def get_streak(self) -> Streak:
        """Return the logging streak."""

    async def get_activity_log(self, day: date | None = None) -> ActivityLog:
        """Return the activity log for a day."""

    async def get_daily_report(self, day: date) -> DailyReport:
        """Return the daily report for a date."""

    async def get_injury_risk(self) -> InjuryReport:
        """Return the current injury risk assessment."""

    async def get_user_profile(self) -> UserProfile:
        """Return the signed in user's profile."""

    async def list_conversations(self) -> list[Conversation]:
        """Return the user's conversations."""

    async def get_messages(self, conversation_id: str) -> list[ChatMessage]:
        """Return messages of a conversation."""


@dataclass
class HttpxApiGateway(ApiGateway):
    """API gateway implemented with httpx."""

    base_url: str
    token_store: TokenStore
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, base_url: str, token_store: TokenStore, timeout_seconds: float = 10
    ) -> "HttpxApiGateway":
        """Create a gateway with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            token_store=token_store,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def calculate_nutrition(self) -> NutritionPlan:
        return await self._fetch(
            "POST",
            "/nutrition/calculate",
            lambda payload: NutritionPlanPayload.model_validate(payload).to_domain(),
        )

    async def get_nutrition_plan(self) -> NutritionPlan:
        # The backend only exposes the calculate endpoint.
        return await self.calculate_nutrition()

    async def search_food(self, query: str) -> list[Food]:
        return await self._fetch(
            "GET",
            "/nutrition/foods",
            lambda payload: [
                FoodPayload.model_validate(item).to_domain() for item in payload
            ],
            params={"search": query},
        )

    async def log_food(
        self, food_id: str, servings: float, meal_type: MealType, day: date
    ) -> FoodLog | None:
        return await self._fetch(
            "POST",
            "/nutrition/log",
            _created_log,
            json={
                "foodId": food_id,
                "servings": servings,
                "mealType": meal_type,
                "date": day.isoformat(),
            },
        )

    async def delete_food_log(self, log_id: str) -> None:
        await self._request("DELETE", f"/nutrition/logs/{log_id}")

    async def get_today_logs(self) -> DailyNutritionSummary:
        return await self._fetch("GET", "/nutrition/logs/today", _today_summary)

    async def log_weight(self, weight: float, note: str | None = None) -> WeightLog:
        return await self._fetch(
            "POST",
            "/nutrition/weight",
            lambda payload: WeightLogPayload.model_validate(
                payload["weightLog"]
            ).to_domain(),
            json={"weight": weight, "note": note},
        )

    async def get_weight_history(self, days: int) -> list[WeightLog]:
        return await self._fetch(
            "GET",
            "/nutrition/weight",
            lambda payload: [
                WeightLogPayload.model_validate(item).to_domain() for item in payload
            ],
            params={"days": days},
        )

    async def get_weight_trend(self, days: int | None = None) -> WeightTrend:
        return await self._fetch(
            "GET",
            "/nutrition/weight/trend",
            lambda payload: WeightTrendPayload.model_validate(payload).to_domain(),
            params={"days": days} if days else None,
        )

    async def get_calorie_history(self, days: int) -> CalorieHistory:
        return await self._fetch(
            "GET",
            "/nutrition/calorie-history",
            lambda payload: CalorieHistoryPayload.model_validate(payload).to_domain(),
            params={"days": days},
        )

    async def get_streak(self) -> Streak:
        return await self._fetch(
            "GET",
            "/nutrition/streak",
            lambda payload: StreakPayload.model_validate(payload).to_domain(),
        )

    async def get_activity_log(self, day: date | None = None) -> ActivityLog:
        return await self._fetch(
            "GET",
            "/activity",
            lambda payload: ActivityLogPayload.model_validate(
                payload["data"]
            ).to_domain(),
            params={"date": day.isoformat()} if day else None,
        )

    async def get_daily_report(self, day: date) -> DailyReport:
        return await self._fetch(
            "GET",
            "/reports/daily",
            lambda payload: DailyReportPayload.model_validate(payload).to_domain(),
            params={"date": day.isoformat()},
        )

    async def get_injury_risk(self) -> InjuryReport:
        return await self._fetch("POST", "/reports/injury-risk", _injury_report)

    async def get_user_profile(self) -> UserProfile:
        return await self._fetch(
            "GET",
            "/users/me",
            lambda payload: UserProfilePayload.model_validate(payload).to_domain(),
        )

    async def list_conversations(self) -> list[Conversation]:
        return await self._fetch(
            "GET",
            "/messages/conversations",
            lambda payload: [
                ConversationPayload.model_validate(item).to_domain()
                for item in payload
            ],
        )

    async def get_messages(self, conversation_id: str) -> list[ChatMessage]:
        return await self._fetch(
            "GET",
            f"/messages/conversations/{conversation_id}/messages",
            lambda payload: [
                ChatMessagePayload.model_validate(item).to_domain()
                for item in payload
            ],
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _fetch(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> T:
        """Send a request and convert its body, rejecting unexpected shapes."""
        payload = await self._request(method, path, params=params, json=json)
        try:
            return parse(payload)
        except (ValidationError, ValueError, KeyError, TypeError) as exc:
            _logger.warning(
                "API %s %s returned an unexpected body: %s", method, path, exc
            )
            raise GatewayError("api", UNEXPECTED_RESPONSE_MESSAGE) from exc

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body."""
        headers = {"Content-Type": "application/json"}
        token = self.token_store.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            _logger.warning("API %s %s unreachable: %s", method, path, exc)
            raise GatewayError("network", NETWORK_ERROR_MESSAGE) from exc

        if response.status_code == 401:
            _logger.info("API returned 401, clearing session token")
            self.token_store.clear()
        if response.is_error:
            raise GatewayError(
                "api", _error_message(response), status_code=response.status_code
            )
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            _logger.warning("API %s %s returned invalid JSON", method, path)
            raise GatewayError(
                "api", UNEXPECTED_RESPONSE_MESSAGE, status_code=response.status_code
            ) from exc


def _created_log(payload: Any) -> FoodLog | None:
    log = payload.get("log") if isinstance(payload, dict) else None
    if log is None:
        return None
    return FoodLogPayload.model_validate(log).to_domain()


def _today_summary(payload: Any) -> DailyNutritionSummary:
    parsed = TodayLogsPayload.model_validate(payload)
    day = parse_day(parsed.date) if parsed.date else None
    return summarize(parsed.logs(), day=day)


def _injury_report(payload: Any) -> InjuryReport:
    assessment = payload.get("assessment") if isinstance(payload, dict) else None
    if not assessment:
        return _NO_ASSESSMENT
    return InjuryReportPayload.model_validate(assessment).to_domain()


def _error_message(response: httpx.Response) -> str:
    """Extract the server message from an error response, if available."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"API Error ({response.status_code})"
