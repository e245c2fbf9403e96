"""Tests for screen tab definitions."""

import pytest

from nutrition_dashboard.domain.nutrition import MEAL_TYPES
from nutrition_dashboard.screen_tabs import (
    MEAL_ICONS,
    NutritionTab,
    ReportSection,
    nutrition_tab,
    tab_items,
)


def test_tab_items_include_diary() -> None:
    items = tab_items()

    assert {"id": "diary", "label": "Diary", "icon": "book-outline"} in items
    assert len(items) == len(list(NutritionTab))


def test_nutrition_tab_lookup() -> None:
    assert nutrition_tab("goals") is NutritionTab.GOALS
    with pytest.raises(ValueError):
        nutrition_tab("unknown")


def test_every_meal_and_section_is_configured() -> None:
    assert set(MEAL_ICONS) == set(MEAL_TYPES)
    assert [section.value.id for section in ReportSection] == [
        "recovery",
        "nutrition",
        "activity",
        "training",
    ]
