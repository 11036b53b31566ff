"""Archive commands: zip, unzip and ls."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import typer
import yaml
from rich import print
from rich.markup import escape
from rich.table import Table

from ..api import default_archive_path, default_extract_dir
from ..archiver import Archiver
from ..cli_utils import get_settings_from_context
from ..extractor import Extractor
from .common import console, handle_cli_errors

ZIP_SRC_ARGUMENT = typer.Argument(..., help="File or directory to archive")
ZIP_OUT_OPTION = typer.Option(
    None, "--out", "-o", help="Destination archive (default: next to SRC, named after it)"
)
ZIP_ROOT_DIR_OPTION = typer.Option(
    True,
    "--root-dir/--no-root-dir",
    help="Keep the source directory as the top-level folder in the archive",
)
UNZIP_ARCHIVE_ARGUMENT = typer.Argument(..., help="Archive to extract")
UNZIP_OUT_OPTION = typer.Option(
    None, "--out", "-o", help="Destination folder (default: sibling named after the archive)"
)
UNZIP_SAFE_OPTION = typer.Option(
    None,
    "--safe/--no-safe",
    help="Reject entries that would land outside the destination (default: from config)",
)
LS_ARCHIVE_ARGUMENT = typer.Argument(..., help="Archive to list")


class ListFormat(str, Enum):
    table = "table"
    json = "json"
    yaml = "yaml"


LS_FORMAT_OPTION = typer.Option(ListFormat.table, "--format", "-f", help="Output format")


def register(app: typer.Typer) -> None:
    app.command("zip")(zip_command)
    app.command("unzip")(unzip_command)
    app.command("ls")(list_command)


@handle_cli_errors
def zip_command(
    ctx: typer.Context,
    src: Path = ZIP_SRC_ARGUMENT,
    out: Path | None = ZIP_OUT_OPTION,
    root_dir: bool = ZIP_ROOT_DIR_OPTION,
) -> None:
    """Pack a file or directory tree into a zip archive."""

    settings = get_settings_from_context(ctx)
    dest = out or default_archive_path(src, settings.extension)
    archiver = Archiver(settings)
    archiver.create(src, dest, include_root_dir=root_dir)
    checksum = archiver.checksum or 0
    print(
        f"Packed {escape(str(src))} -> {escape(str(dest))} "
        f"({archiver.entry_count} entries, crc32={checksum:08x})"
    )


@handle_cli_errors
def unzip_command(
    ctx: typer.Context,
    archive: Path = UNZIP_ARCHIVE_ARGUMENT,
    out: Path | None = UNZIP_OUT_OPTION,
    safe: bool | None = UNZIP_SAFE_OPTION,
) -> None:
    """Extract every entry of an archive."""

    settings = get_settings_from_context(ctx)
    if safe is not None:
        settings = settings.model_copy(update={"safe_extract": safe})
    dest = out or default_extract_dir(archive)
    Extractor(settings).extract_all(archive, dest)
    print(f"Unpacked {escape(str(archive))} -> {escape(str(dest))}")


@handle_cli_errors
def list_command(
    ctx: typer.Context,
    archive: Path = LS_ARCHIVE_ARGUMENT,
    fmt: ListFormat = LS_FORMAT_OPTION,
) -> None:
    """List the entries stored in an archive."""

    settings = get_settings_from_context(ctx)
    listing = Extractor(settings).list_entries(archive)

    if fmt is ListFormat.json:
        typer.echo(json.dumps(listing.model_dump(mode="json"), indent=2))
        return
    if fmt is ListFormat.yaml:
        typer.echo(yaml.safe_dump(listing.model_dump(mode="json"), sort_keys=False))
        return

    table = Table(title=escape(str(archive)))
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Compressed", justify="right")
    table.add_column("CRC-32")
    for entry in listing.entries:
        name = escape(entry.name)
        if entry.is_dir:
            name = f"[bold]{name}[/bold]"
        table.add_row(name, str(entry.size), str(entry.compressed_size), f"{entry.crc:08x}")
    console.print(table)
    console.print(f"{listing.file_count} files, {listing.total_size} bytes")


__all__ = ["ListFormat", "list_command", "register", "unzip_command", "zip_command"]
