"""Domain models for report date navigation."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarDay:
    """A calendar grid cell; padding cells have no date."""

    date: date | None
    is_today: bool
    is_selected: bool
    is_future: bool

    @property
    def selectable(self) -> bool:
        """Return whether the cell can be picked."""
        return self.date is not None and not self.is_future
