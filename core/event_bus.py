"""In-process event bus for kernel lifecycle events."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger("wb.events")

EventHandler = Callable[[Any], None]


class KernelEvent(str, Enum):
    """Closed set of events the kernel raises or consumes."""

    READINESS_SIGNALED = "WindowManager"
    APPLICATION_LAUNCHED = "applicationLaunched"


class EventBus:
    """Dispatches events to subscribers by event name, in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[KernelEvent, list[tuple[EventHandler, bool]]] = defaultdict(list)

    def subscribe(self, event: KernelEvent, handler: EventHandler) -> None:
        """Register a persistent callback for an event."""
        self._handlers[event].append((handler, False))

    def once(self, event: KernelEvent, handler: EventHandler) -> None:
        """Register a callback that is removed after its first delivery."""
        self._handlers[event].append((handler, True))

    def unsubscribe(self, event: KernelEvent, handler: EventHandler) -> None:
        self._handlers[event] = [
            entry for entry in self._handlers.get(event, []) if entry[0] != handler
        ]

    def listener_count(self, event: KernelEvent) -> int:
        return len(self._handlers.get(event, []))

    def emit(self, event: KernelEvent, payload: Any = None) -> None:
        """Emit an event to all current subscribers."""
        entries = list(self._handlers.get(event, []))
        if not entries:
            return
        self._handlers[event] = [entry for entry in self._handlers[event] if not entry[1]]
        logger.debug("Emitting %s to %d listener(s)", event.value, len(entries))
        for handler, _ in entries:
            handler(payload)
