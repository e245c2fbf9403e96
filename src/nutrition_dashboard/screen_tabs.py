"""Tab and section configuration for dashboard screens."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class TabDefinition:
    """Declarative tab definition."""

    id: str
    label: str
    icon: str


class NutritionTab(Enum):
    """Tabs of the nutrition screen (single source of truth)."""

    DIARY = TabDefinition("diary", "Diary", "book-outline")
    NUTRIENTS = TabDefinition("nutrients", "Nutrients", "nutrition-outline")
    TRENDS = TabDefinition("trends", "Trends", "trending-up-outline")
    GOALS = TabDefinition("goals", "Goals", "flag-outline")


class ReportSection(Enum):
    """Expandable sections of the daily report screen."""

    RECOVERY = TabDefinition("recovery", "Recovery Status", "fitness-outline")
    NUTRITION = TabDefinition("nutrition", "Nutrition", "restaurant-outline")
    ACTIVITY = TabDefinition("activity", "Activity", "walk-outline")
    TRAINING = TabDefinition("training", "Training", "barbell-outline")


MEAL_ICONS: dict[str, str] = {
    "breakfast": "sunny-outline",
    "lunch": "partly-sunny-outline",
    "dinner": "moon-outline",
    "snack": "cafe-outline",
}


def nutrition_tab(tab_id: str) -> NutritionTab:
    """Return the nutrition tab for an id."""
    for entry in NutritionTab:
        if entry.value.id == tab_id:
            return entry
    raise ValueError(f"Unknown nutrition tab: {tab_id}")


def tab_items() -> list[dict[str, str]]:
    """Return nutrition tabs formatted for rendering."""
    return [
        {"id": entry.value.id, "label": entry.value.label, "icon": entry.value.icon}
        for entry in NutritionTab
    ]
