"""Application descriptors, identity tokens and the in-process application base."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApplicationToken:
    """Opaque per-registration identity. Compared by identity only."""

    __slots__ = ("label", "key")

    def __init__(self, label: str) -> None:
        self.label = label
        self.key = uuid.uuid4().hex

    def __repr__(self) -> str:
        return f"ApplicationToken<{self.label}>"


class ApplicationDescriptor(BaseModel):
    """Registration record for one application."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    display_name: str = ""
    icons: list[str] = Field(default_factory=list)
    headless: bool = False
    no_main_window: bool = False
    root_view: bool = False
    resources: dict[str, Any] = Field(default_factory=dict)
    menu: dict[str, Any] | None = None
    remote: bool = False
    remote_host: Any = None
    factory: Callable[..., Any] | None = None
    token: ApplicationToken | None = None

    def create_instance(self, source: Any = None) -> Any:
        """Build a fresh instance for one launch attempt."""
        factory = self.factory or Application
        return factory(self, source)


class Application:
    """Base class for applications running inside the kernel process."""

    def __init__(self, descriptor: ApplicationDescriptor, source: Any = None) -> None:
        self.descriptor = descriptor
        self.source = source
        self.root_view: Any = descriptor.root_view
        self.window: Any = None
        self.initialized = False
        self.terminated = False
        self.logger = logging.getLogger(f"wb.app.{descriptor.name}")

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def display_name(self) -> str:
        return self.descriptor.display_name

    @property
    def headless(self) -> bool:
        return self.descriptor.headless

    @property
    def no_main_window(self) -> bool:
        return self.descriptor.no_main_window

    def init(self, window: Any) -> None:
        """Receive the main window (or headless context) and start running."""
        self.window = window
        self.initialized = True

    def terminate(self, reason: str = "terminated") -> None:
        # Instances stay tracked after termination.
        self.terminated = True
        self.logger.error("Died -> %s", reason)
