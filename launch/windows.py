"""Window handles and the default main-window provider."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from apps.descriptor import ApplicationToken
from core.errors import RemoteLaunchError

WindowProvider = Callable[[], Any]

_view_ids = itertools.count(1)


class ViewController:
    """A node in the view tree bound to a template."""

    def __init__(self, template: Any = None, view: dict[str, Any] | None = None, view_id: str | None = None) -> None:
        self.id = view_id or f"view-{next(_view_ids)}"
        self.template = template
        self.view = view or {}
        self.children: list[ViewController] = []
        self.updates = 0

    def attach(self, child: ViewController) -> None:
        self.children.append(child)

    def update(self) -> None:
        self.updates += 1


class Viewport:
    """Content area of a window. Binding replaces the current content scope."""

    def __init__(self, parent: ViewController) -> None:
        self.parent = parent
        self.scope: ViewController | None = None

    def bind(self, template: Any, view: dict[str, Any] | None = None) -> ViewController:
        controller = ViewController(template, view)
        self.parent.attach(controller)
        self.scope = controller
        return controller

    def update(self) -> None:
        if self.scope is None:
            raise RuntimeError("Viewport has no bound view.")
        self.scope.update()


class Window:
    """Live in-process window. Never sent across a process boundary."""

    def __init__(self, window_id: str, viewport: Viewport, owner: ApplicationToken | None = None) -> None:
        self.id = window_id
        self.viewport = viewport
        self.owner = owner


class WindowDescriptor(BaseModel):
    """Serializable stand-in for a window on the far side of a process boundary."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner: str | None = None


def to_window_descriptor(window: Any) -> WindowDescriptor:
    """Reduce a live window to its id and owning token key."""
    window_id = getattr(window, "id", None)
    if window_id is None:
        raise RemoteLaunchError(f"Window provider returned a window without an id: {window!r}")
    owner = getattr(window, "owner", None)
    return WindowDescriptor(id=str(window_id), owner=owner.key if owner is not None else None)


class DefaultWindowProvider:
    """Hands out one shared main window whose viewport binds into the main view."""

    def __init__(self, main_view_id: str = "main-view") -> None:
        self.scope = ViewController(view_id=main_view_id)
        self.window = Window(main_view_id, Viewport(self.scope))

    def __call__(self) -> Window:
        return self.window
