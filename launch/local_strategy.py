"""Initialization of in-process application instances."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from apps.descriptor import ApplicationDescriptor
from apps.info import ApplicationInfo
from core.event_bus import EventBus, KernelEvent
from launch.readiness import WindowReadinessGate
from launch.windows import WindowProvider

logger = logging.getLogger("wb.launch.local")


class LocalLaunchStrategy:
    """Decides between the headless, immediate-window and deferred-window paths."""

    def __init__(
        self,
        events: EventBus,
        readiness: WindowReadinessGate,
        request_window: WindowProvider,
    ) -> None:
        self.events = events
        self.readiness = readiness
        self.request_window = request_window

    def launch(self, descriptor: ApplicationDescriptor, instance: Any, source: Any = None) -> None:
        if source is not None:
            logger.debug("%s launched by %s", descriptor.name, getattr(source, "name", source))

        if descriptor.headless:
            asyncio.get_running_loop().call_soon(self._init_headless, descriptor, instance)
            return

        if getattr(instance, "root_view", None) or self.readiness.ready:
            self._init(descriptor, instance)
            return

        logger.debug("Deferring %s until the window manager is ready", descriptor.name)
        self.events.once(
            KernelEvent.READINESS_SIGNALED,
            lambda _payload: self._init(descriptor, instance),
        )

    def _init(self, descriptor: ApplicationDescriptor, instance: Any) -> None:
        # The provider is looked up now, not when launch() was called.
        window = None if descriptor.no_main_window else self.request_window()
        logger.info("Application %s loaded!", descriptor.name)
        self.events.emit(KernelEvent.APPLICATION_LAUNCHED, ApplicationInfo.from_descriptor(descriptor))
        instance.init(window)

    def _init_headless(self, descriptor: ApplicationDescriptor, instance: Any) -> None:
        logger.info("Application %s loaded!", descriptor.name)
        instance.init({})
        self.events.emit(KernelEvent.APPLICATION_LAUNCHED, ApplicationInfo.from_descriptor(descriptor))
