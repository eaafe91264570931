"""Remote host contracts and an in-process loopback host."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, Protocol, runtime_checkable

from apps.descriptor import ApplicationDescriptor
from core.errors import RemoteHostContractError, RemoteLaunchError
from launch.windows import WindowDescriptor

logger = logging.getLogger("wb.launch.remote_host")

REQUIRED_ACCESSORS = ("name", "display_name", "icons", "no_main_window", "headless")


@runtime_checkable
class RemoteInstanceHandle(Protocol):
    """Surface a remote application instance must expose."""

    def init(self, window: WindowDescriptor | None) -> Any: ...

    def name(self) -> Awaitable[str]: ...

    def display_name(self) -> Awaitable[str]: ...

    def icons(self) -> Awaitable[list[str]]: ...

    def no_main_window(self) -> Awaitable[bool]: ...

    def headless(self) -> Awaitable[bool]: ...


class RemoteHost(Protocol):
    """Starts applications in another process."""

    async def start_remote(self, name: str) -> RemoteInstanceHandle: ...


def validate_handle(handle: Any) -> RemoteInstanceHandle:
    """Fail explicitly when a handle does not expose the full remote surface."""
    missing = [
        attr
        for attr in (*REQUIRED_ACCESSORS, "init")
        if not callable(getattr(handle, attr, None))
    ]
    if missing:
        raise RemoteHostContractError(
            f"Remote handle {type(handle).__name__} is missing: {', '.join(missing)}"
        )
    return handle


class LoopbackInstance:
    """Remote-style handle whose accessors each cost one scheduling turn."""

    def __init__(self, descriptor: ApplicationDescriptor, latency: float = 0.0) -> None:
        self._descriptor = descriptor
        self._latency = latency
        self.window: WindowDescriptor | None = None
        self.initialized = False

    async def _hop(self) -> None:
        await asyncio.sleep(self._latency)

    async def name(self) -> str:
        await self._hop()
        return self._descriptor.name

    async def display_name(self) -> str:
        await self._hop()
        return self._descriptor.display_name

    async def icons(self) -> list[str]:
        await self._hop()
        return list(self._descriptor.icons)

    async def no_main_window(self) -> bool:
        await self._hop()
        return self._descriptor.no_main_window

    async def headless(self) -> bool:
        await self._hop()
        return self._descriptor.headless

    async def init(self, window: WindowDescriptor | None) -> None:
        await self._hop()
        if window is not None:
            # Round-trip through JSON the way a process boundary would.
            window = WindowDescriptor.model_validate_json(window.model_dump_json())
        self.window = window
        self.initialized = True
        logger.info("Remote instance %s initialized", self._descriptor.name)


class InProcessRemoteHost:
    """Serves registered descriptors as remote instances from this process."""

    def __init__(self, latency: float = 0.0) -> None:
        self.latency = latency
        self._served: dict[str, ApplicationDescriptor] = {}
        self.started: list[LoopbackInstance] = []

    def serve(self, descriptor: ApplicationDescriptor) -> None:
        self._served[descriptor.name] = descriptor

    async def start_remote(self, name: str) -> LoopbackInstance:
        await asyncio.sleep(self.latency)
        descriptor = self._served.get(name)
        if descriptor is None:
            raise RemoteLaunchError(f"Remote host does not serve {name}")
        handle = LoopbackInstance(descriptor, latency=self.latency)
        self.started.append(handle)
        logger.debug("Started remote instance of %s", name)
        return handle
