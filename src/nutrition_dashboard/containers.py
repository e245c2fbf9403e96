"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_dashboard.adapters.api_gateway import ApiGateway, HttpxApiGateway
from nutrition_dashboard.adapters.token_store import InMemoryTokenStore
from nutrition_dashboard.app_logging import configure_logging
from nutrition_dashboard.config import Settings
from nutrition_dashboard.services.messaging import (
    ConversationListScreen,
    ConversationScreen,
)
from nutrition_dashboard.services.nutrition_screen import NutritionScreen
from nutrition_dashboard.services.report_screen import ReportScreen


@dataclass
class AppContainer:
    """Holds application-wide dependencies and builds screens."""

    settings: Settings
    token_store: InMemoryTokenStore
    gateway: ApiGateway
    close_resources: Callable[[], Awaitable[None]]

    def nutrition_screen(self) -> NutritionScreen:
        """Create a fresh nutrition screen state."""
        return NutritionScreen(
            gateway=self.gateway,
            search_debounce_seconds=self.settings.search_debounce_seconds,
            calorie_history_days=self.settings.calorie_history_days,
            weight_history_days=self.settings.weight_history_days,
        )

    def report_screen(self) -> ReportScreen:
        """Create a fresh daily report screen state."""
        return ReportScreen(gateway=self.gateway)

    def conversation_list_screen(self) -> ConversationListScreen:
        return ConversationListScreen(
            gateway=self.gateway,
            poll_seconds=self.settings.conversation_list_poll_seconds,
        )

    def conversation_screen(self, conversation_id: str) -> ConversationScreen:
        return ConversationScreen(
            gateway=self.gateway,
            conversation_id=conversation_id,
            poll_seconds=self.settings.conversation_poll_seconds,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level.upper())
    token_store = InMemoryTokenStore(token=resolved_settings.api_token)
    gateway = HttpxApiGateway.create(
        base_url=resolved_settings.api_base_url,
        token_store=token_store,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )

    async def close_resources() -> None:
        await gateway.close()

    return AppContainer(
        settings=resolved_settings,
        token_store=token_store,
        gateway=gateway,
        close_resources=close_resources,
    )
