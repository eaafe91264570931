"""Filesystem volume placeholder."""

from __future__ import annotations

from typing import Any

from core.errors import UnimplementedCapabilityError
from services.error_handler import ErrorHandler


class Volume:
    """Volume without a backing store. Reads and writes only signal non-implementation."""

    type = "volume"

    def __init__(self, error_handler: ErrorHandler) -> None:
        self.error_handler = error_handler
        self.index: list[str] = []

    async def ready(self) -> None:
        raise UnimplementedCapabilityError("volume not initialized")

    def read_file(self, path: str) -> None:
        _ = path
        self.error_handler.method_not_implemented("Volume")

    def write_file(self, path: str, content: str | bytes | Any) -> None:
        _ = (path, content)
        self.error_handler.method_not_implemented("Volume")
