"""Collaborator service tests."""

from __future__ import annotations

import asyncio
import logging

import pytest

from apps.descriptor import ApplicationToken
from core.errors import ErrorKind, UnimplementedCapabilityError
from services.error_handler import ErrorHandler
from services.log_buffer import LogBuffer, LogEntry
from services.menu_registry import MenuRegistry
from services.resource_packager import ResourcePackager
from services.volume import Volume


def test_log_buffer_replays_then_streams() -> None:
    buffer = LogBuffer(capacity=2)
    logger = logging.getLogger("wb.test.log_buffer")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(buffer)
    try:
        logger.info("one")
        logger.info("two")
        logger.error("three %s", "boom")

        seen: list[LogEntry] = []
        buffer.connect(seen.append)
        logger.info("four")
    finally:
        logger.removeHandler(buffer)

    assert [entry.content for entry in seen] == [
        "wb.test.log_buffer: two",
        "wb.test.log_buffer: three boom",
        "wb.test.log_buffer: four",
    ]
    assert [entry.type for entry in buffer.items("error")] == ["error"]


def test_log_buffer_disconnect_stops_delivery() -> None:
    buffer = LogBuffer()
    seen: list[LogEntry] = []
    buffer.connect(seen.append)
    buffer.disconnect(seen.append)

    buffer.handle(logging.makeLogRecord({"name": "wb", "msg": "hello", "levelno": logging.INFO}))

    assert seen == []
    assert len(buffer.items()) == 1


def test_error_handler_records_reports_without_raising() -> None:
    handler = ErrorHandler()

    handler.application_not_available("ghost")
    handler.method_not_implemented("Volume")

    assert [report.kind for report in handler.reports] == [
        ErrorKind.APPLICATION_NOT_AVAILABLE,
        ErrorKind.UNIMPLEMENTED_CAPABILITY,
    ]
    assert handler.reports_of(ErrorKind.UNIMPLEMENTED_CAPABILITY)[0].subject == "Volume"


def test_volume_signals_not_implemented() -> None:
    handler = ErrorHandler()
    volume = Volume(handler)

    volume.read_file("/etc/hosts")
    volume.write_file("/tmp/out", "data")

    assert len(handler.reports_of(ErrorKind.UNIMPLEMENTED_CAPABILITY)) == 2
    with pytest.raises(UnimplementedCapabilityError):
        asyncio.run(volume.ready())


def test_resource_packager_urls_and_lookup() -> None:
    packager = ResourcePackager()

    url = packager.package_resource("calc", "ui", "<template/>")

    assert url == "app://calc/ui"
    assert packager.resolve("calc", "ui") == "<template/>"
    assert packager.resolve("calc", "missing") is None
    assert packager.resources_of("calc") == {"ui": "<template/>"}


def test_menu_registry_is_keyed_by_token_identity() -> None:
    menus = MenuRegistry()
    token = ApplicationToken("calc")
    same_name = ApplicationToken("calc")

    menus.register_menu(token, {"items": ["About"]})

    assert menus.get_menu(token) == {"items": ["About"]}
    assert menus.get_menu(same_name) is None
    assert len(menus) == 1
