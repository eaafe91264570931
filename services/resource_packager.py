"""Packages application resources and resolves them to URLs."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("wb.resources")


class ResourcePackager:
    """In-memory resource store keyed by application name and resource key."""

    scheme = "app"

    def __init__(self) -> None:
        self._resources: dict[tuple[str, str], Any] = {}

    def url_for(self, app_name: str, key: str) -> str:
        return f"{self.scheme}://{app_name}/{key}"

    def package_resource(self, app_name: str, key: str, value: Any) -> str:
        self._resources[(app_name, key)] = value
        logger.debug("Packaged resource %s for %s", key, app_name)
        return self.url_for(app_name, key)

    def resolve(self, app_name: str, key: str) -> Any | None:
        return self._resources.get((app_name, key))

    def resources_of(self, app_name: str) -> dict[str, Any]:
        return {key: value for (owner, key), value in self._resources.items() if owner == app_name}
