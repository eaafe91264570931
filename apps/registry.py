"""Registry of installed application descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from apps.descriptor import ApplicationDescriptor, ApplicationToken
from core.errors import ErrorKind
from services.menu_registry import MenuRegistry
from services.resource_packager import ResourcePackager

logger = logging.getLogger("wb.registry")


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of one registration attempt."""

    ok: bool
    name: str
    token: ApplicationToken | None = None
    orchestrator: Any = None
    error: ErrorKind | None = None

    def __bool__(self) -> bool:
        return self.ok


class ApplicationRegistry:
    """Stores descriptors by unique name and mints their identity tokens."""

    def __init__(self, resource_packager: ResourcePackager, menu_registry: MenuRegistry) -> None:
        self.resource_packager = resource_packager
        self.menu_registry = menu_registry
        self._descriptors: dict[str, ApplicationDescriptor] = {}

    def register(self, descriptor: ApplicationDescriptor) -> RegistrationResult:
        """Store ``descriptor`` and forward its resources and menu.

        A name collision leaves the stored descriptor untouched and has no side effects.
        """
        name = descriptor.name
        if name in self._descriptors:
            logger.error(
                'Application "%s" already exists!',
                name,
                extra={"error_kind": ErrorKind.DUPLICATE_REGISTRATION.value},
            )
            return RegistrationResult(ok=False, name=name, error=ErrorKind.DUPLICATE_REGISTRATION)

        token = ApplicationToken(name)
        stored = descriptor.model_copy(
            update={
                "token": token,
                "icons": list(descriptor.icons),
                "resources": dict(descriptor.resources),
            }
        )
        self._descriptors[name] = stored

        for key, value in stored.resources.items():
            self.resource_packager.package_resource(name, key, value)

        if stored.menu is not None:
            self.menu_registry.register_menu(token, stored.menu)

        logger.info("Application %s registered!", name)
        return RegistrationResult(ok=True, name=name, token=token)

    def get(self, name: str) -> ApplicationDescriptor | None:
        return self._descriptors.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def names(self) -> list[str]:
        return list(self._descriptors)
