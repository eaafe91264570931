"""CLI entrypoint for the workbox kernel."""

from __future__ import annotations

import typer

from ui.cli import commands

app = typer.Typer(help="Workbox application kernel")
apps_app = typer.Typer(help="Application commands")
config_app = typer.Typer(help="Configuration commands")
logs_app = typer.Typer(help="Log commands")


@apps_app.command("list")
def apps_list_cmd() -> None:
    """List applications declared in the manifest."""
    commands.apps_list()


@apps_app.command("launch")
def apps_launch_cmd(
    name: str = typer.Argument(..., help="Name of the application to launch"),
    ready: bool = typer.Option(True, "--ready/--no-ready", help="Signal window manager readiness"),
    timeout: float = typer.Option(5.0, min=0.0, help="Seconds to wait for remote launches"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo kernel logs"),
) -> None:
    """Boot the kernel and launch one application."""
    commands.apps_launch(name=name, ready=ready, timeout=timeout, verbose=verbose)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


@logs_app.command("show")
def logs_show_cmd(
    errors: bool = typer.Option(False, "--errors", help="Only show error entries"),
) -> None:
    """Boot the kernel and show the buffered log."""
    commands.logs_show(errors=errors)


app.add_typer(apps_app, name="apps")
app.add_typer(config_app, name="config")
app.add_typer(logs_app, name="logs")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
