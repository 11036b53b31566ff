"""Commands for inspecting and changing stored treezip settings."""

from __future__ import annotations

import typer
from rich import print
from rich.markup import escape

from ..config import ENV_OVERRIDES, ArchiveSettings, ConfigStore
from .common import handle_cli_errors

app = typer.Typer(help="Settings & configuration")


@app.command("show")
@handle_cli_errors
def config_show() -> None:
    """Display the effective settings, including environment overrides."""

    store = ConfigStore()
    settings = store.load()
    print(f"Config file: {escape(str(store.path))}")
    for key, value in settings.model_dump().items():
        env_name = ENV_OVERRIDES.get(key)
        suffix = f"  (overridable with {env_name})" if env_name else ""
        print(f"{key} = {escape(repr(value))}{suffix}")


@app.command("set")
@handle_cli_errors
def config_set(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(ArchiveSettings.model_fields)})"),
    value: str = typer.Argument(..., help="New value; 'none' clears optional settings"),
) -> None:
    """Persist a single setting."""

    settings = ConfigStore().set_value(key, value)
    print(f"{key} set to {escape(repr(getattr(settings, key)))}")


@app.command("reset")
@handle_cli_errors
def config_reset() -> None:
    """Restore the default settings."""

    ConfigStore().reset()
    print("Settings reset to defaults")


__all__ = ["app", "config_reset", "config_set", "config_show"]
