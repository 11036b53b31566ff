"""Write a file or a directory tree into a zip archive."""

from __future__ import annotations

import logging
import os
import sys
import zipfile
from pathlib import Path
from typing import IO

from . import guard
from .checksum import ChecksumWriter
from .config import ArchiveSettings
from .errors import ArchiveIOError
from .fileutil import close_quietly, copy_stream, sub_path

logger = logging.getLogger(__name__)


def root_prefix(src: Path, include_root_dir: bool) -> Path:
    """Return the directory stripped from file paths to build entry names."""

    if src.is_file() or include_root_dir:
        return src.parent
    return src


class Archiver:
    def __init__(
        self,
        settings: ArchiveSettings | None = None,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or ArchiveSettings()
        self.log = log or logger
        self.checksum: int | None = None
        self.bytes_written = 0
        self.entry_count = 0

    def create(
        self,
        src: str | os.PathLike[str],
        dest: str | os.PathLike[str],
        include_root_dir: bool = True,
    ) -> Path:
        """Archive ``src`` into ``dest`` and return ``dest``.

        ``include_root_dir`` keeps the source directory itself as the top-level
        folder of the archive; without it the directory contents sit at the
        archive root. A single file is always stored under its base name.
        """

        source = Path(src)
        target = Path(dest)
        guard.validate(source, target)

        self.checksum = None
        self.bytes_written = 0
        self.entry_count = 0

        source = Path(os.path.abspath(source))
        prefix = root_prefix(source, include_root_dir)
        stream: IO[bytes] | None = None
        try:
            stream = target.open("wb")
            writer = ChecksumWriter(stream)
            with zipfile.ZipFile(
                writer,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.settings.compress_level,
            ) as out:
                self._add(prefix, source, out)
            writer.flush()
        except (OSError, zipfile.LargeZipFile) as exc:
            raise ArchiveIOError(f"Unable to write archive {target}", cause=exc) from exc
        finally:
            close_quietly(stream)

        self.checksum = writer.crc32
        self.bytes_written = writer.bytes_written
        self.log.info(
            "Wrote %s (%d entries, %d bytes, crc32=%s)",
            target,
            self.entry_count,
            self.bytes_written,
            writer.hexdigest,
        )
        return target

    def _add(self, prefix: Path, path: Path | None, out: zipfile.ZipFile) -> None:
        if path is None:
            return

        if path.is_file():
            self._add_file(prefix, path, out)
        elif path.is_dir():
            with os.scandir(path) as children:
                for child in children:
                    self._add(prefix, Path(child.path), out)
        else:
            self.log.debug("Skipping %s: not a regular file or directory", path)

    def _add_file(self, prefix: Path, path: Path, out: zipfile.ZipFile) -> None:
        name = sub_path(prefix, path)
        self.log.debug("ZIP %s", name)
        info = zipfile.ZipInfo.from_file(path, arcname=name, strict_timestamps=False)
        info.compress_type = zipfile.ZIP_DEFLATED
        if sys.version_info >= (3, 13):
            info.compress_level = out.compresslevel
        else:
            info._compresslevel = out.compresslevel

        entry = out.open(info, "w")
        try:
            with path.open("rb") as source:
                copy_stream(source, entry, self.settings.buffer_size)
        finally:
            self._close_entry(entry, name)
        self.entry_count += 1

    def _close_entry(self, entry: IO[bytes], name: str) -> None:
        """Finish the current entry; a failure here never aborts the archive."""

        try:
            entry.close()
        except (OSError, ValueError) as exc:
            self.log.debug("Ignoring failure while closing entry %s: %s", name, exc)


__all__ = ["Archiver", "root_prefix"]
