"""Launch sequence for applications hosted in another process."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any

from apps.descriptor import ApplicationDescriptor
from apps.info import ApplicationInfo, RemoteMetadata
from apps.tracker import InstanceTracker
from core.errors import ErrorKind, RemoteLaunchError
from core.event_bus import EventBus, KernelEvent
from launch.readiness import WindowReadinessGate
from launch.remote_host import RemoteHost, RemoteInstanceHandle, validate_handle
from launch.windows import WindowProvider, to_window_descriptor

logger = logging.getLogger("wb.launch.remote")


async def fetch_remote_metadata(handle: RemoteInstanceHandle) -> RemoteMetadata:
    """Query the five metadata accessors concurrently and join them."""
    name, display_name, icons, no_main_window, headless = await asyncio.gather(
        handle.name(),
        handle.display_name(),
        handle.icons(),
        handle.no_main_window(),
        handle.headless(),
    )
    return RemoteMetadata(
        name=name,
        display_name=display_name,
        icons=icons,
        no_main_window=no_main_window,
        headless=headless,
    )


async def _call_init(handle: RemoteInstanceHandle, window: Any) -> None:
    result = handle.init(window)
    if inspect.isawaitable(result):
        await result


class RemoteLaunchProxy:
    """Starts a remote instance, gates on window readiness and initializes it.

    Failures anywhere in the chain are logged and swallowed. A tracker entry
    appended before the failure stays in place.
    """

    def __init__(
        self,
        *,
        tracker: InstanceTracker,
        events: EventBus,
        readiness: WindowReadinessGate,
        request_window: WindowProvider,
        default_host: RemoteHost | None = None,
        reserve_pending_slot: bool = True,
    ) -> None:
        self.tracker = tracker
        self.events = events
        self.readiness = readiness
        self.request_window = request_window
        self.default_host = default_host
        self.reserve_pending_slot = reserve_pending_slot
        self.pending: set[asyncio.Task[None]] = set()

    def launch(self, descriptor: ApplicationDescriptor) -> asyncio.Task[None]:
        """Schedule the remote launch chain. Must be called inside a running loop."""
        loop = asyncio.get_running_loop()
        if self.reserve_pending_slot:
            self.tracker.reserve(descriptor.name)
        task = loop.create_task(self._run(descriptor), name=f"remote-launch:{descriptor.name}")
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)
        return task

    async def _run(self, descriptor: ApplicationDescriptor) -> None:
        try:
            await self._launch(descriptor)
        except Exception as exc:
            logger.error(
                "Remote launch of %s failed: %s",
                descriptor.name,
                exc,
                exc_info=True,
                extra={"error_kind": ErrorKind.REMOTE_LAUNCH_FAILURE.value},
            )
        finally:
            self.tracker.release(descriptor.name)

    async def _launch(self, descriptor: ApplicationDescriptor) -> None:
        name = descriptor.name
        host = descriptor.remote_host or self.default_host
        if host is None:
            raise RemoteLaunchError(f"No remote host available for {name}")

        handle = validate_handle(await host.start_remote(name))
        logger.info("launching %s...", name)
        self.tracker.append(name, handle)

        record = await fetch_remote_metadata(handle)
        logger.info("Application %s loaded!", name)
        info = ApplicationInfo.from_record(record, token=descriptor.token)

        if record.headless:
            await _call_init(handle, None)
            self.events.emit(KernelEvent.APPLICATION_LAUNCHED, info)
            return

        await self.readiness.wait_ready()
        window = None
        if not record.no_main_window:
            window = to_window_descriptor(self.request_window())
        self.events.emit(KernelEvent.APPLICATION_LAUNCHED, info)
        await _call_init(handle, window)
