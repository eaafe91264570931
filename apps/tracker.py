"""Tracks running application instances by name."""

from __future__ import annotations

from typing import Any


class InstanceTracker:
    """Name-keyed store of ordered instance lists.

    Entries are never pruned; a name stays listed once an instance was appended.
    Reserved names count as running until the real entry lands or the
    reservation is released.
    """

    def __init__(self) -> None:
        self._instances: dict[str, list[Any]] = {}
        self._reserved: set[str] = set()

    def append(self, name: str, instance: Any) -> None:
        self._instances.setdefault(name, []).append(instance)
        self._reserved.discard(name)

    def get(self, name: str) -> list[Any] | None:
        """Return the live list for ``name`` (not a copy), or None."""
        return self._instances.get(name)

    def has_running(self, name: str) -> bool:
        return name in self._reserved or bool(self._instances.get(name))

    def reserve(self, name: str) -> None:
        self._reserved.add(name)

    def release(self, name: str) -> None:
        self._reserved.discard(name)

    def is_reserved(self, name: str) -> bool:
        return name in self._reserved

    def names(self) -> list[str]:
        return list(self._instances)
