from __future__ import annotations

import logging
import os
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..errors import ConfigError, InvalidDestinationError, SourceNotFoundError, TreezipError

console = Console()
err_console = Console(stderr=True)

CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Route ``treezip`` log records to stderr through rich."""

    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    root = logging.getLogger("treezip")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=debug)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except SourceNotFoundError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(1) from None
        except InvalidDestinationError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            console.print("Choose an output path outside the directory being archived.")
            raise typer.Exit(1) from None
        except ConfigError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            console.print(
                "Run `tzip config show` to inspect or `tzip config reset` to restore defaults."
            )
            raise typer.Exit(1) from None
        except TreezipError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(1) from None
        except Exception as exc:
            if os.getenv("TREEZIP_DEBUG"):
                raise
            console.print(f"[red]Error:[/red] Unexpected failure: {escape(str(exc))}")
            console.print("Set TREEZIP_DEBUG=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


__all__ = [
    "configure_logging",
    "console",
    "err_console",
    "handle_cli_errors",
]
