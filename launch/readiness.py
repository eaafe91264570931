"""One-shot readiness signal for the window-provisioning subsystem."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from core.event_bus import EventBus, KernelEvent

logger = logging.getLogger("wb.launch.readiness")


class WindowReadinessGate:
    """Flips to ready on the first readiness event and never goes back."""

    def __init__(self, events: EventBus) -> None:
        self._ready = False
        self._signal: asyncio.Event | None = None
        self._signal_loop: asyncio.AbstractEventLoop | None = None
        events.subscribe(KernelEvent.READINESS_SIGNALED, self._on_ready)

    @property
    def ready(self) -> bool:
        return self._ready

    def _on_ready(self, _payload: Any = None) -> None:
        if self._ready:
            return
        self._ready = True
        if self._signal is not None:
            self._signal.set()
        logger.info("Window manager ready")

    async def wait_ready(self) -> None:
        """Resolve once the window subsystem is ready; immediately if it already is."""
        if self._ready:
            return
        loop = asyncio.get_running_loop()
        # The event is bound to the loop that waits on it; waiters of an earlier loop are gone.
        if self._signal is None or self._signal_loop is not loop:
            self._signal = asyncio.Event()
            self._signal_loop = loop
        await self._signal.wait()
