"""Builds a configured kernel runtime and boots manifest applications."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apps.descriptor import ApplicationDescriptor
from core.orchestrator import ApplicationOrchestrator
from core.policy_runtime import load_effective_config
from launch.remote_host import InProcessRemoteHost
from services.error_handler import ErrorHandler
from services.log_buffer import LogBuffer
from services.menu_registry import MenuRegistry
from services.resource_packager import ResourcePackager
from services.volume import Volume

logger = logging.getLogger("wb.runtime")

MANIFEST_ONLY_KEYS = {"autostart"}


class TerminalHandler(logging.StreamHandler):
    """Echoes kernel log lines to stderr."""

    def __init__(self) -> None:
        super().__init__()
        self.setFormatter(logging.Formatter("[Terminal] %(name)s: %(message)s"))


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    orchestrator: ApplicationOrchestrator
    remote_host: InProcessRemoteHost
    log_buffer: LogBuffer
    error_handler: ErrorHandler
    resource_packager: ResourcePackager
    menu_registry: MenuRegistry
    volume: Volume
    manifest: list[tuple[ApplicationDescriptor, bool]] = field(default_factory=list)


def configure_logging(config: dict[str, Any], stream: bool = False) -> LogBuffer:
    """Attach a fresh log buffer to the ``wb`` logger tree."""
    logging_cfg = config.get("logging", {})
    root_logger = logging.getLogger("wb")
    root_logger.setLevel(str(logging_cfg.get("level", "INFO")).upper())

    for handler in list(root_logger.handlers):
        if isinstance(handler, (LogBuffer, TerminalHandler)):
            root_logger.removeHandler(handler)

    buffer = LogBuffer(capacity=int(logging_cfg.get("buffer_size", 500)))
    root_logger.addHandler(buffer)
    if stream:
        root_logger.addHandler(TerminalHandler())
    return buffer


def manifest_descriptors(config: dict[str, Any]) -> list[tuple[ApplicationDescriptor, bool]]:
    """Validate manifest entries into descriptors paired with their autostart flag."""
    manifest: list[tuple[ApplicationDescriptor, bool]] = []
    for entry in config.get("applications", []):
        if not isinstance(entry, dict):
            raise ValueError(f"Application manifest entries must be mappings: {entry!r}")
        fields = {key: value for key, value in entry.items() if key not in MANIFEST_ONLY_KEYS}
        manifest.append((ApplicationDescriptor.model_validate(fields), bool(entry.get("autostart", False))))
    return manifest


def build_runtime(root: Path | None = None, *, stream_logs: bool = False) -> RuntimeBundle:
    default_root = Path(__file__).resolve().parents[1]
    root = (root or default_root).resolve()
    config = load_effective_config(root)
    log_buffer = configure_logging(config, stream=stream_logs)

    error_handler = ErrorHandler()
    resource_packager = ResourcePackager()
    menu_registry = MenuRegistry()
    remote_host = InProcessRemoteHost()
    kernel_cfg = config.get("kernel", {})
    orchestrator = ApplicationOrchestrator(
        error_handler=error_handler,
        resource_packager=resource_packager,
        menu_registry=menu_registry,
        remote_host=remote_host,
        reserve_pending_slot=bool(config.get("remote", {}).get("reserve_pending_slot", True)),
        main_view_id=str(kernel_cfg.get("main_view_id", "main-view")),
    )

    return RuntimeBundle(
        config=config,
        orchestrator=orchestrator,
        remote_host=remote_host,
        log_buffer=log_buffer,
        error_handler=error_handler,
        resource_packager=resource_packager,
        menu_registry=menu_registry,
        volume=Volume(error_handler),
        manifest=manifest_descriptors(config),
    )


def boot(bundle: RuntimeBundle) -> list[str]:
    """Register every manifest application and launch the autostart ones.

    Must run inside the event loop when any autostart application is headless or remote.
    """
    logger.info("found %d applications!", len(bundle.manifest))
    launched: list[str] = []
    for descriptor, autostart in bundle.manifest:
        if descriptor.remote:
            bundle.remote_host.serve(descriptor)
        result = bundle.orchestrator.register(descriptor)
        if result and autostart:
            result.orchestrator.launch(descriptor.name)
            launched.append(descriptor.name)
    return launched
