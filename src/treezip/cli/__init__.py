from __future__ import annotations

import typer

from .. import __version__
from . import archive, config
from .common import configure_logging

app = typer.Typer(help="treezip: pack file trees into zip archives and back")

app.add_typer(config.app, name="config")
archive.register(app)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"treezip {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log a summary of each operation"),
    debug: bool = typer.Option(False, "--debug", help="Log every archive entry"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version"
    ),
) -> None:
    """Initialize shared Typer context state."""

    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", None)
    configure_logging(verbose=verbose, debug=debug)


__all__ = ["app", "archive", "config"]
