"""Recreate the files and directories stored in a zip archive."""

from __future__ import annotations

import logging
import os
import zipfile
import zlib
from pathlib import Path

from .config import ArchiveSettings
from .errors import ArchiveIOError, SourceNotFoundError, UnsafeEntryError
from .fileutil import copy_stream, mkdirs, touch
from .models import ArchiveListing, EntryInfo

logger = logging.getLogger(__name__)

# Read failures surfaced by zipfile: corrupt streams, encrypted or unsupported entries.
_ENTRY_ERRORS = (
    OSError,
    EOFError,
    zipfile.BadZipFile,
    zlib.error,
    RuntimeError,
    NotImplementedError,
)


def entry_target(dest_dir: Path, name: str) -> Path:
    """Join an entry name onto ``dest_dir`` as stored, without sanitizing it."""

    return dest_dir / name.lstrip("/")


def _check_entry(dest_root: Path, name: str) -> None:
    member = Path(name)
    if member.is_absolute() or name.startswith("/"):
        raise UnsafeEntryError(name, f"Archive member {name!r} has an absolute path")
    target = (dest_root / member).resolve()
    if target != dest_root and dest_root not in target.parents:
        raise UnsafeEntryError(name, f"Archive member {name!r} would extract outside {dest_root}")


def _open_archive(archive: Path) -> zipfile.ZipFile:
    if not archive.exists():
        raise SourceNotFoundError(archive)
    try:
        return zipfile.ZipFile(archive, "r")
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveIOError(f"Unable to open archive {archive}", cause=exc) from exc


class Extractor:
    def __init__(
        self,
        settings: ArchiveSettings | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or ArchiveSettings()
        self.log = log or logger

    def extract_all(
        self, archive: str | os.PathLike[str], dest_dir: str | os.PathLike[str]
    ) -> Path:
        """Extract every entry of ``archive`` below ``dest_dir`` and return ``dest_dir``.

        Entries are processed in stored order. Files already extracted stay on
        disk when a later entry fails.
        """

        archive_path = Path(archive)
        dest = Path(dest_dir)
        with _open_archive(archive_path) as zf:
            try:
                mkdirs(dest)
            except OSError as exc:
                raise ArchiveIOError(f"Unable to create directory {dest}", cause=exc) from exc
            dest_root = dest.resolve()
            count = 0
            for info in zf.infolist():
                if self.settings.safe_extract:
                    _check_entry(dest_root, info.filename)
                target = entry_target(dest, info.filename)
                self.log.debug("UNZIP %s", target)
                try:
                    if info.is_dir():
                        mkdirs(target)
                    else:
                        touch(target)
                        with zf.open(info) as source, target.open("wb") as output:
                            copy_stream(source, output, self.settings.buffer_size)
                except _ENTRY_ERRORS as exc:
                    raise ArchiveIOError(
                        f"Unable to extract {info.filename!r} from {archive_path}", cause=exc
                    ) from exc
                count += 1
        self.log.info("Extracted %d entries from %s into %s", count, archive_path, dest)
        return dest

    def list_entries(self, archive: str | os.PathLike[str]) -> ArchiveListing:
        archive_path = Path(archive)
        with _open_archive(archive_path) as zf:
            entries = [EntryInfo.from_zipinfo(info) for info in zf.infolist()]
        return ArchiveListing(path=str(archive_path), entries=entries)


__all__ = ["Extractor", "entry_target"]
