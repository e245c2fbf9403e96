"""Debounce, polling and screen lifetime primitives on asyncio."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScheduledTask(Protocol):
    """A task owned by a screen and cancelled on teardown."""

    async def stop(self) -> None:
        """Cancel pending work."""


@dataclass
class Debouncer(Generic[T]):
    """Runs the callback once the trigger has been quiet for the delay."""

    delay_seconds: float
    callback: Callable[[T], Awaitable[None]]
    _task: asyncio.Task | None = field(default=None, init=False, repr=False)

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, value: T) -> None:
        """Restart the timer with a new value."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(value))

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the pending call to finish."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def stop(self) -> None:
        task = self._task
        self.cancel()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _fire(self, value: T) -> None:
        await asyncio.sleep(self.delay_seconds)
        try:
            await self.callback(value)
        except Exception:
            _logger.exception("Debounced callback failed")


@dataclass
class Poller:
    """Calls the callback immediately and then on a fixed interval."""

    interval_seconds: float
    callback: Callable[[], Awaitable[None]]
    name: str = "poller"
    _task: asyncio.Task | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start polling; a running poller is left alone."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._loop())

    async def stop(self) -> None:
        """Cancel polling and wait for the task to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _loop(self) -> None:
        while True:
            try:
                await self.callback()
            except Exception:
                _logger.exception("Polling %s failed", self.name)
            await asyncio.sleep(self.interval_seconds)


@dataclass
class ScreenLifetime:
    """Mount state of a screen and the scheduled tasks it owns."""

    mounted: bool = False
    _owned: list[ScheduledTask] = field(default_factory=list, repr=False)

    def mount(self) -> None:
        self.mounted = True

    async def unmount(self) -> None:
        """Mark the screen disposed and stop every owned task."""
        self.mounted = False
        owned, self._owned = self._owned, []
        for task in owned:
            await task.stop()

    def own(self, task: ScheduledTask) -> ScheduledTask:
        """Register a task to be stopped on unmount."""
        self._owned.append(task)
        return task

    def guard(self, handler: Callable[[T], None]) -> Callable[[T], None]:
        """Wrap a result handler so it is ignored after unmount."""

        def apply(value: T) -> None:
            if not self.mounted:
                _logger.debug("Dropping result for unmounted screen")
                return
            handler(value)

        return apply
