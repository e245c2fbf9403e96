"""Tests for report date navigation."""

from datetime import date

from nutrition_dashboard.services.history import (
    SectionToggle,
    build_calendar_grid,
    can_page_forward,
    change_month,
    format_date_display,
    page_date,
)
from tests.conftest import TODAY


def test_page_date_moves_backwards() -> None:
    assert page_date(TODAY, -1, TODAY) == date(2026, 3, 17)
    assert page_date(date(2026, 3, 1), -1, TODAY) == date(2026, 2, 28)


def test_page_date_never_moves_into_the_future() -> None:
    assert page_date(TODAY, 1, TODAY) == TODAY
    assert page_date(date(2026, 3, 17), 1, TODAY) == TODAY
    assert not can_page_forward(TODAY, TODAY)
    assert can_page_forward(date(2026, 3, 17), TODAY)


def test_calendar_grid_pads_to_sunday_start() -> None:
    # 1 March 2026 is a Sunday, 1 April 2026 a Wednesday.
    march = build_calendar_grid(date(2026, 3, 1), TODAY, TODAY)
    april = build_calendar_grid(date(2026, 4, 1), TODAY, TODAY)

    assert march[0].date == date(2026, 3, 1)
    assert len(march) == 31
    assert [cell.date for cell in april[:3]] == [None, None, None]
    assert april[3].date == date(2026, 4, 1)
    assert len(april) == 3 + 30


def test_calendar_grid_flags_cells() -> None:
    grid = build_calendar_grid(TODAY, date(2026, 3, 10), TODAY)
    by_day = {cell.date.day: cell for cell in grid if cell.date is not None}

    assert by_day[18].is_today
    assert by_day[10].is_selected
    assert by_day[19].is_future
    assert not by_day[19].selectable
    assert by_day[17].selectable


def test_change_month_rolls_over_short_months() -> None:
    assert change_month(date(2026, 1, 31), 1) == date(2026, 3, 3)
    assert change_month(date(2026, 3, 18), -1) == date(2026, 2, 18)
    assert change_month(date(2026, 1, 15), -1) == date(2025, 12, 15)


def test_format_date_display() -> None:
    assert format_date_display(TODAY, TODAY) == "Today"
    assert format_date_display(date(2026, 3, 17), TODAY) == "Yesterday"
    assert format_date_display(date(2026, 3, 3), TODAY) == "Mar 3, 2026"


def test_section_toggle_keeps_one_section_open() -> None:
    toggle = SectionToggle()

    assert toggle.toggle("recovery") == "recovery"
    assert toggle.toggle("nutrition") == "nutrition"
    assert not toggle.is_expanded("recovery")
    assert toggle.toggle("nutrition") is None
