"""Date paging and calendar grids for report lookups."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

from nutrition_dashboard.domain.history import CalendarDay


def page_date(current: date, delta_days: int, today: date | None = None) -> date:
    """Move by delta_days, keeping current when the result is in the future."""
    resolved_today = today or date.today()
    candidate = current + timedelta(days=delta_days)
    if candidate > resolved_today:
        return current
    return candidate


def can_page_forward(selected: date, today: date | None = None) -> bool:
    """Return False when the selected date is already today."""
    return selected < (today or date.today())


def build_calendar_grid(
    month: date, selected: date, today: date | None = None
) -> list[CalendarDay]:
    """Return padding cells plus one cell per day of the month of `month`.

    Padding equals the weekday of the first of the month with Sunday as 0.
    """
    resolved_today = today or date.today()
    first = month.replace(day=1)
    padding = (first.weekday() + 1) % 7
    days_in_month = calendar.monthrange(first.year, first.month)[1]

    cells = [
        CalendarDay(date=None, is_today=False, is_selected=False, is_future=False)
        for _ in range(padding)
    ]
    for day_number in range(1, days_in_month + 1):
        day = first.replace(day=day_number)
        cells.append(
            CalendarDay(
                date=day,
                is_today=day == resolved_today,
                is_selected=day == selected,
                is_future=day > resolved_today,
            )
        )
    return cells


def change_month(selected: date, delta: int) -> date:
    """Shift the month, letting an overflowing day roll into the next month."""
    month_index = selected.year * 12 + (selected.month - 1) + delta
    year, month = divmod(month_index, 12)
    first = date(year, month + 1, 1)
    return first + timedelta(days=selected.day - 1)


def format_date_display(day: date, today: date | None = None) -> str:
    """Return "Today", "Yesterday" or a short date like "Mar 3, 2026"."""
    resolved_today = today or date.today()
    if day == resolved_today:
        return "Today"
    if day == resolved_today - timedelta(days=1):
        return "Yesterday"
    return f"{day.strftime('%b')} {day.day}, {day.year}"


@dataclass
class SectionToggle:
    """Tracks the single expanded section of an accordion."""

    expanded: str | None = None

    def toggle(self, section: str) -> str | None:
        """Expand a section, or collapse it when it is already open."""
        self.expanded = None if self.expanded == section else section
        return self.expanded

    def is_expanded(self, section: str) -> bool:
        return self.expanded == section
