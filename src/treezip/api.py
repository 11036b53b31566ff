"""Convenience entry points mirroring the common zip/unzip call shapes."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .archiver import Archiver
from .config import ArchiveSettings
from .extractor import Extractor
from .fileutil import main_name
from .models import ArchiveListing


def default_archive_path(src: str | os.PathLike[str], extension: str = ".zip") -> Path:
    """Return the archive path used when only a source is given: beside ``src``."""

    source = Path(src).absolute()
    return source.parent / f"{main_name(source)}{extension}"


def default_extract_dir(archive: str | os.PathLike[str]) -> Path:
    archive_path = Path(archive).absolute()
    return archive_path.parent / main_name(archive_path)


def zip_tree(
    src: str | os.PathLike[str],
    dest: str | os.PathLike[str] | None = None,
    *,
    include_root_dir: bool = True,
    settings: ArchiveSettings | None = None,
    log: logging.Logger | None = None,
) -> Path:
    """Archive a file or directory and return the archive path.

    Without ``dest`` the archive is written next to ``src`` and named after it.
    """

    cfg = settings or ArchiveSettings()
    target = Path(dest) if dest is not None else default_archive_path(src, cfg.extension)
    return Archiver(cfg, log=log).create(src, target, include_root_dir)


def unzip_archive(
    archive: str | os.PathLike[str],
    dest: str | os.PathLike[str] | None = None,
    *,
    settings: ArchiveSettings | None = None,
    log: logging.Logger | None = None,
) -> Path:
    """Extract ``archive`` and return the directory it was extracted into.

    Without ``dest`` a sibling directory named after the archive is used.
    """

    target = Path(dest) if dest is not None else default_extract_dir(archive)
    return Extractor(settings, log=log).extract_all(archive, target)


def list_entries(
    archive: str | os.PathLike[str], *, log: logging.Logger | None = None
) -> ArchiveListing:
    return Extractor(log=log).list_entries(archive)


__all__ = [
    "default_archive_path",
    "default_extract_dir",
    "list_entries",
    "unzip_archive",
    "zip_tree",
]
