"""Typer command handlers."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer

from core.event_bus import KernelEvent
from core.runtime import RuntimeBundle, boot, build_runtime


def _runtime(root: Path | None = None, verbose: bool = False) -> RuntimeBundle:
    return build_runtime(root=root, stream_logs=verbose)


async def _settle(bundle: RuntimeBundle, timeout: float) -> None:
    # One turn lets scheduled headless initializations run.
    await asyncio.sleep(0)
    pending = set(bundle.orchestrator.remote.pending)
    if pending:
        await asyncio.wait(pending, timeout=timeout)


def apps_list() -> None:
    """List manifest applications."""
    bundle = _runtime()
    for descriptor, autostart in bundle.manifest:
        flags = [
            flag
            for flag, enabled in (
                ("remote", descriptor.remote),
                ("headless", descriptor.headless),
                ("autostart", autostart),
            )
            if enabled
        ]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        typer.echo(f"{descriptor.name}: {descriptor.display_name}{suffix}")


def apps_launch(name: str, ready: bool = True, timeout: float = 5.0, verbose: bool = False) -> None:
    """Boot, launch ``name`` and report the active applications."""

    async def session() -> RuntimeBundle:
        bundle = _runtime(verbose=verbose)
        boot(bundle)
        bundle.orchestrator.launch(name)
        if ready:
            bundle.orchestrator.events.emit(KernelEvent.READINESS_SIGNALED)
        await _settle(bundle, timeout)
        return bundle

    bundle = asyncio.run(session())
    if bundle.orchestrator.get_instances(name) is None:
        typer.echo(f"Application {name} was not launched.", err=True)
        raise typer.Exit(code=1)

    for info in bundle.orchestrator.get_active_application_list():
        instances = bundle.orchestrator.get_instances(info.name) or []
        typer.echo(f"{info.name}: {info.display_name} ({len(instances)} instance(s))")


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.config, indent=2, default=str))


def logs_show(errors: bool = False) -> None:
    """Show the log buffer after boot."""

    async def session() -> RuntimeBundle:
        bundle = _runtime()
        boot(bundle)
        await _settle(bundle, timeout=1.0)
        return bundle

    bundle = asyncio.run(session())
    for entry in bundle.log_buffer.items("error" if errors else None):
        typer.echo(f"[{entry.type}] {entry.content}")
