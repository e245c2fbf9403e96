"""Screen-scoped state for the daily report."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from nutrition_dashboard.adapters.api_gateway import ApiGateway
from nutrition_dashboard.domain.history import CalendarDay
from nutrition_dashboard.domain.reports import (
    DailyReport,
    DailyScore,
    InjuryReport,
    RecoveryDetails,
)
from nutrition_dashboard.services.history import (
    SectionToggle,
    build_calendar_grid,
    can_page_forward,
    change_month,
    format_date_display,
    page_date,
)
from nutrition_dashboard.services.scheduling import ScreenLifetime
from nutrition_dashboard.services.scoring import daily_score, recovery_details

_logger = logging.getLogger(__name__)


@dataclass
class ReportScreen:
    """Daily report with date paging and expandable sections."""

    gateway: ApiGateway
    clock: Callable[[], date] = date.today
    selected_date: date | None = None
    report: DailyReport | None = None
    injury_risk: InjuryReport | None = None
    score: DailyScore | None = None
    recovery: RecoveryDetails | None = None
    errors: dict[str, str] = field(default_factory=dict)
    sections: SectionToggle = field(default_factory=SectionToggle)
    lifetime: ScreenLifetime = field(default_factory=ScreenLifetime)
    _loads_in_flight: int = field(default=0, init=False, repr=False)

    async def mount(self) -> None:
        self.lifetime.mount()
        if self.selected_date is None:
            self.selected_date = self.clock()
        await self.load()

    async def unmount(self) -> None:
        await self.lifetime.unmount()

    async def load(self) -> None:
        """Fetch the report and injury risk for the selected date in parallel."""
        day = self.selected_date or self.clock()
        self._loads_in_flight += 1
        try:
            report, injury_risk = await asyncio.gather(
                self.gateway.get_daily_report(day),
                self.gateway.get_injury_risk(),
                return_exceptions=True,
            )
        finally:
            self._loads_in_flight -= 1
        self.lifetime.guard(self._apply)((day, report, injury_risk))

    @property
    def is_loading(self) -> bool:
        """Return whether any report load is still running."""
        return self._loads_in_flight > 0

    @property
    def title(self) -> str:
        return format_date_display(self.selected_date or self.clock(), self.clock())

    @property
    def can_go_forward(self) -> bool:
        return can_page_forward(self.selected_date or self.clock(), self.clock())

    @property
    def calendar(self) -> list[CalendarDay]:
        selected = self.selected_date or self.clock()
        return build_calendar_grid(selected, selected, self.clock())

    async def go_to_previous_day(self) -> bool:
        return await self._move(-1)

    async def go_to_next_day(self) -> bool:
        return await self._move(1)

    async def select_date(self, day: date) -> bool:
        """Select a calendar day; future days are rejected."""
        if day > self.clock():
            return False
        return await self._set_date(day)

    async def change_month(self, delta: int) -> bool:
        """Shift the selected date by months, clamped to today."""
        current = self.selected_date or self.clock()
        target = min(change_month(current, delta), self.clock())
        return await self._set_date(target)

    def toggle_section(self, section: str) -> str | None:
        return self.sections.toggle(section)

    async def _move(self, delta_days: int) -> bool:
        current = self.selected_date or self.clock()
        return await self._set_date(page_date(current, delta_days, self.clock()))

    async def _set_date(self, day: date) -> bool:
        if day == self.selected_date:
            return False
        self.selected_date = day
        await self.load()
        return True

    def _apply(self, results: tuple[date, object, object]) -> None:
        day, report, injury_risk = results
        if day != self.selected_date:
            # A newer date change owns the screen now.
            return
        if isinstance(report, BaseException):
            _logger.warning("Failed to load report for %s: %s", day, report)
            self.errors["report"] = str(report)
            self.report = None
        else:
            self.errors.pop("report", None)
            self.report = report
        if isinstance(injury_risk, BaseException):
            _logger.warning("Failed to load injury risk: %s", injury_risk)
            self.errors["injury_risk"] = str(injury_risk)
            self.injury_risk = None
        else:
            self.errors.pop("injury_risk", None)
            self.injury_risk = injury_risk
        self.score = daily_score(self.report, self.injury_risk)
        self.recovery = recovery_details(self.injury_risk)
