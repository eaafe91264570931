"""Application menu ownership."""

from __future__ import annotations

import logging
from typing import Any

from apps.descriptor import ApplicationToken

logger = logging.getLogger("wb.menus")


class MenuRegistry:
    """Maps application tokens to their menu descriptors."""

    def __init__(self) -> None:
        self._menus: dict[ApplicationToken, dict[str, Any]] = {}

    def register_menu(self, token: ApplicationToken, menu: dict[str, Any]) -> None:
        self._menus[token] = menu
        logger.debug("Registered menu for %r", token)

    def get_menu(self, token: ApplicationToken) -> dict[str, Any] | None:
        return self._menus.get(token)

    def __len__(self) -> int:
        return len(self._menus)
