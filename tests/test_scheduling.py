"""Tests for debounce, polling and screen lifetime helpers."""

import asyncio

from nutrition_dashboard.services.scheduling import Debouncer, Poller, ScreenLifetime


def test_debouncer_only_fires_last_value() -> None:
    seen: list[str] = []

    async def record(value: str) -> None:
        seen.append(value)

    async def scenario() -> None:
        debouncer = Debouncer(0.02, record)
        for query in ("a", "ap", "app"):
            debouncer.trigger(query)
            await asyncio.sleep(0.001)
        assert debouncer.pending
        await debouncer.wait()
        assert not debouncer.pending

    asyncio.run(scenario())

    assert seen == ["app"]


def test_debouncer_stop_drops_pending_call() -> None:
    seen: list[str] = []

    async def record(value: str) -> None:
        seen.append(value)

    async def scenario() -> None:
        debouncer = Debouncer(0.02, record)
        debouncer.trigger("chicken")
        await debouncer.stop()
        await asyncio.sleep(0.04)

    asyncio.run(scenario())

    assert seen == []


def test_debouncer_logs_callback_failures() -> None:
    async def fail(value: str) -> None:
        raise RuntimeError(value)

    async def scenario() -> None:
        debouncer = Debouncer(0, fail)
        debouncer.trigger("boom")
        await debouncer.wait()

    asyncio.run(scenario())


def test_poller_runs_until_stopped() -> None:
    calls: list[int] = []

    async def tick() -> None:
        calls.append(len(calls))
        if len(calls) == 2:
            raise RuntimeError("transient")

    async def scenario() -> int:
        poller = Poller(0.01, tick, name="test")
        poller.start()
        poller.start()
        await asyncio.sleep(0.06)
        await poller.stop()
        assert not poller.running
        stopped_at = len(calls)
        await asyncio.sleep(0.03)
        return stopped_at

    stopped_at = asyncio.run(scenario())

    assert stopped_at >= 3
    assert len(calls) == stopped_at


def test_screen_lifetime_guards_results_and_stops_tasks() -> None:
    applied: list[int] = []

    async def noop() -> None:
        return None

    async def scenario() -> Poller:
        lifetime = ScreenLifetime()
        lifetime.mount()
        poller = Poller(10, noop)
        lifetime.own(poller)
        poller.start()
        apply = lifetime.guard(applied.append)

        apply(1)
        await lifetime.unmount()
        apply(2)
        return poller

    poller = asyncio.run(scenario())

    assert applied == [1]
    assert not poller.running
