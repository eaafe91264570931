"""Application registry and info projection tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from apps.descriptor import ApplicationDescriptor
from apps.info import ApplicationInfo, RemoteMetadata
from apps.registry import ApplicationRegistry
from core.errors import ErrorKind
from core.orchestrator import ApplicationOrchestrator
from services.menu_registry import MenuRegistry
from services.resource_packager import ResourcePackager


def calc_descriptor(**overrides: object) -> ApplicationDescriptor:
    fields: dict[str, object] = {
        "name": "calc",
        "display_name": "Calculator",
        "icons": ["a.png"],
        "resources": {"ui": "<template/>"},
        "menu": {"items": ["About"]},
    }
    fields.update(overrides)
    return ApplicationDescriptor(**fields)


def test_register_forwards_resources_and_menu() -> None:
    packager = MagicMock()
    menus = MagicMock()
    registry = ApplicationRegistry(resource_packager=packager, menu_registry=menus)

    result = registry.register(calc_descriptor())

    assert result.ok is True
    assert result.error is None
    packager.package_resource.assert_called_once_with("calc", "ui", "<template/>")
    menus.register_menu.assert_called_once_with(result.token, {"items": ["About"]})
    assert registry.get("calc").token is result.token


def test_duplicate_registration_is_rejected_without_side_effects() -> None:
    packager = MagicMock()
    menus = MagicMock()
    registry = ApplicationRegistry(resource_packager=packager, menu_registry=menus)
    first = registry.register(calc_descriptor())

    second = registry.register(calc_descriptor(display_name="Imposter", resources={"ui": "<other/>"}))

    assert not second
    assert second.error is ErrorKind.DUPLICATE_REGISTRATION
    assert second.token is None
    stored = registry.get("calc")
    assert stored.display_name == "Calculator"
    assert stored.token is first.token
    assert packager.package_resource.call_count == 1
    assert menus.register_menu.call_count == 1


def test_orchestrator_register_supports_chaining() -> None:
    orchestrator = ApplicationOrchestrator()

    result = orchestrator.register(calc_descriptor())
    chained = result.orchestrator.register(ApplicationDescriptor(name="notes"))

    assert result.orchestrator is orchestrator
    assert chained.ok is True
    assert orchestrator.register(calc_descriptor()).orchestrator is None


def test_tokens_are_unique_per_registration() -> None:
    left = ApplicationOrchestrator().register(calc_descriptor())
    right = ApplicationOrchestrator().register(calc_descriptor())

    assert left.token is not right.token
    assert left.token != right.token
    assert left.token.key != right.token.key


def test_application_info_icons_are_copies() -> None:
    icons = ["a.png"]
    orchestrator = ApplicationOrchestrator()
    orchestrator.register(calc_descriptor(icons=icons))

    info = orchestrator.get_application("calc")
    icons.append("c.png")

    assert isinstance(info.icons, tuple)
    with pytest.raises(AttributeError):
        info.icons.append("b.png")  # type: ignore[attr-defined]
    assert orchestrator.registry.get("calc").icons == ["a.png"]
    assert orchestrator.get_application("calc").icons == ("a.png",)


def test_application_info_is_frozen() -> None:
    orchestrator = ApplicationOrchestrator()
    result = orchestrator.register(calc_descriptor())
    info = orchestrator.get_application("calc")

    assert info.token is result.token
    with pytest.raises(ValidationError):
        info.name = "other"


def test_get_application_unknown_returns_none() -> None:
    assert ApplicationOrchestrator().get_application("missing") is None


def test_info_from_record_normalizes_missing_icons() -> None:
    record = RemoteMetadata(name="term", display_name="Terminal", icons=None, headless=True)

    info = ApplicationInfo.from_record(record)

    assert info.icons == ()
    assert info.headless is True
    assert info.token is None


def test_injected_empty_menu_registry_receives_menus() -> None:
    menus = MenuRegistry()
    packager = ResourcePackager()
    orchestrator = ApplicationOrchestrator(menu_registry=menus, resource_packager=packager)

    result = orchestrator.register(calc_descriptor())

    assert orchestrator.registry.menu_registry is menus
    assert orchestrator.registry.resource_packager is packager
    assert menus.get_menu(result.token) == {"items": ["About"]}
    assert packager.resolve("calc", "ui") == "<template/>"


def test_empty_menu_is_still_registered() -> None:
    menus = MagicMock()
    registry = ApplicationRegistry(resource_packager=MagicMock(), menu_registry=menus)

    result = registry.register(calc_descriptor(menu={}))
    registry.register(ApplicationDescriptor(name="plain"))

    menus.register_menu.assert_called_once_with(result.token, {})
