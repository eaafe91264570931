"""Instance tracker, event bus and readiness gate tests."""

from __future__ import annotations

import asyncio

from apps.tracker import InstanceTracker
from core.event_bus import EventBus, KernelEvent
from launch.readiness import WindowReadinessGate


def test_tracker_appends_in_order_and_returns_live_list() -> None:
    tracker = InstanceTracker()
    assert tracker.get("calc") is None
    assert tracker.has_running("calc") is False

    tracker.append("calc", "first")
    live = tracker.get("calc")
    tracker.append("calc", "second")

    assert live == ["first", "second"]
    assert tracker.has_running("calc") is True
    assert tracker.names() == ["calc"]


def test_tracker_reservation_counts_as_running() -> None:
    tracker = InstanceTracker()
    tracker.reserve("term")

    assert tracker.has_running("term") is True
    assert tracker.names() == []

    tracker.append("term", "handle")
    assert tracker.is_reserved("term") is False

    tracker.reserve("other")
    tracker.release("other")
    assert tracker.has_running("other") is False


def test_event_bus_once_and_persistent_handlers() -> None:
    bus = EventBus()
    calls: list[str] = []
    bus.subscribe(KernelEvent.APPLICATION_LAUNCHED, lambda payload: calls.append(f"always:{payload}"))
    bus.once(KernelEvent.APPLICATION_LAUNCHED, lambda payload: calls.append(f"once:{payload}"))

    bus.emit(KernelEvent.APPLICATION_LAUNCHED, "a")
    bus.emit(KernelEvent.APPLICATION_LAUNCHED, "b")

    assert calls == ["always:a", "once:a", "always:b"]
    assert bus.listener_count(KernelEvent.APPLICATION_LAUNCHED) == 1


def test_event_bus_unsubscribe() -> None:
    bus = EventBus()
    calls: list[object] = []
    bus.subscribe(KernelEvent.READINESS_SIGNALED, calls.append)
    bus.unsubscribe(KernelEvent.READINESS_SIGNALED, calls.append)

    bus.emit(KernelEvent.READINESS_SIGNALED)

    assert calls == []


def test_readiness_gate_resolves_all_waiters_once() -> None:
    async def scenario() -> list[int]:
        bus = EventBus()
        gate = WindowReadinessGate(bus)
        order: list[int] = []

        async def waiter(index: int) -> None:
            await gate.wait_ready()
            order.append(index)

        tasks = [asyncio.create_task(waiter(i)) for i in range(3)]
        await asyncio.sleep(0)
        assert order == []
        assert gate.ready is False

        bus.emit(KernelEvent.READINESS_SIGNALED)
        bus.emit(KernelEvent.READINESS_SIGNALED)
        await asyncio.gather(*tasks)

        await gate.wait_ready()
        assert gate.ready is True
        return order

    assert sorted(asyncio.run(scenario())) == [0, 1, 2]
