"""Application lifecycle orchestrator."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Any

from apps.descriptor import ApplicationDescriptor
from apps.info import ApplicationInfo
from apps.registry import ApplicationRegistry, RegistrationResult
from apps.tracker import InstanceTracker
from core.event_bus import EventBus
from launch.local_strategy import LocalLaunchStrategy
from launch.readiness import WindowReadinessGate
from launch.remote_host import RemoteHost
from launch.remote_proxy import RemoteLaunchProxy
from launch.windows import DefaultWindowProvider, WindowProvider
from services.error_handler import ErrorHandler
from services.menu_registry import MenuRegistry
from services.resource_packager import ResourcePackager

logger = logging.getLogger("wb.kernel.applicationmanager")


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class ApplicationOrchestrator:
    """Registers applications, launches them locally or remotely and tracks instances.

    Headless and remote launches schedule work on the running event loop; outside
    one they are refused and logged. The readiness gate may be awaited from
    successive loops.
    """

    name = "workbox.kernel.applicationmanager"

    def __init__(
        self,
        *,
        events: EventBus | None = None,
        error_handler: ErrorHandler | None = None,
        resource_packager: ResourcePackager | None = None,
        menu_registry: MenuRegistry | None = None,
        remote_host: RemoteHost | None = None,
        window_provider: WindowProvider | None = None,
        reserve_pending_slot: bool = True,
        main_view_id: str = "main-view",
    ) -> None:
        self.events = events if events is not None else EventBus()
        self.error_handler = error_handler if error_handler is not None else ErrorHandler()
        self.registry = ApplicationRegistry(
            resource_packager=resource_packager if resource_packager is not None else ResourcePackager(),
            menu_registry=menu_registry if menu_registry is not None else MenuRegistry(),
        )
        self.tracker = InstanceTracker()
        self.readiness = WindowReadinessGate(self.events)
        self._window_provider: WindowProvider = (
            window_provider if window_provider is not None else DefaultWindowProvider(main_view_id)
        )
        self.local = LocalLaunchStrategy(
            events=self.events,
            readiness=self.readiness,
            request_window=self.request_application_main_window,
        )
        self.remote = RemoteLaunchProxy(
            tracker=self.tracker,
            events=self.events,
            readiness=self.readiness,
            request_window=self.request_application_main_window,
            default_host=remote_host,
            reserve_pending_slot=reserve_pending_slot,
        )

    def update_window_manager(self, provider: WindowProvider) -> None:
        """Replace the main-window provider used by every later initialization."""
        self._window_provider = provider

    def request_application_main_window(self) -> Any:
        return self._window_provider()

    def register(self, descriptor: ApplicationDescriptor) -> RegistrationResult:
        """Register a new application.

        Returns a truthy result carrying this orchestrator for chaining, or a falsy
        one when the name is already taken.
        """
        result = self.registry.register(descriptor)
        if not result.ok:
            return result
        return replace(result, orchestrator=self)

    def launch(self, name: str, source: Any = None) -> None:
        """Launch the application registered under ``name``."""
        descriptor = self.registry.get(name)
        if descriptor is None:
            self.error_handler.application_not_available(name)
            return

        if self.tracker.has_running(name):
            logger.info("Application %s is already running!", name)
            return

        if (descriptor.remote or descriptor.headless) and not _loop_running():
            # Refused before anything is tracked.
            logger.error("Application %s can only be launched from a running event loop!", name)
            return

        if descriptor.remote:
            self.remote.launch(descriptor)
            return

        instance = descriptor.create_instance(source)
        logger.info("launching %s...", name)
        self.tracker.append(name, instance)
        self.local.launch(descriptor, instance, source)

    def get_instances(self, name: str) -> list[Any] | None:
        """Return the live instance list for ``name``; callers must not mutate it."""
        return self.tracker.get(name)

    def get_application(self, name: str) -> ApplicationInfo | None:
        descriptor = self.registry.get(name)
        if descriptor is None:
            return None
        return ApplicationInfo.from_descriptor(descriptor)

    def get_active_application_list(self) -> list[ApplicationInfo]:
        """Info for every application that was ever tracked, terminated or not."""
        active: list[ApplicationInfo] = []
        for name in self.tracker.names():
            descriptor = self.registry.get(name)
            if descriptor is not None:
                active.append(ApplicationInfo.from_descriptor(descriptor))
        return active
