"""Tests for container wiring."""

import asyncio

from nutrition_dashboard.config import Settings
from nutrition_dashboard.containers import build_container


def test_build_container_creates_screens(settings) -> None:
    container = build_container(settings)

    nutrition = container.nutrition_screen()
    conversation = container.conversation_screen("conv-1")

    assert container.token_store.get_token() == "token"
    assert nutrition.search_debounce_seconds == settings.search_debounce_seconds
    assert container.report_screen().gateway is container.gateway
    assert container.conversation_list_screen().poll_seconds == 0.01
    assert conversation.conversation_id == "conv-1"
    asyncio.run(container.close_resources())


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "https://fitness.example/api")
    monkeypatch.delenv("API_TOKEN", raising=False)

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://fitness.example/api"
    assert settings.search_debounce_seconds == 0.3
    assert settings.conversation_poll_seconds == 5
    assert settings.conversation_list_poll_seconds == 15
    assert settings.api_token is None
    assert settings.log_level == "INFO"
