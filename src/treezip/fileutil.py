"""Small filesystem helpers shared by the archiver and the extractor."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import IO, Any

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 64 * 1024


def touch(path: str | os.PathLike[str]) -> Path:
    """Create ``path`` as an empty file, including missing parent directories.

    An existing file is left untouched.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    if not target.exists():
        target.touch()
    return target


def mkdirs(path: str | os.PathLike[str]) -> Path:
    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target


def main_name(path: str | os.PathLike[str]) -> str:
    """Return the name of ``path`` without its last extension.

    Directories keep their full name so ``release.v2/`` stays ``release.v2``.
    """

    target = Path(path)
    if target.is_dir():
        return target.name
    return target.stem


def sub_path(root: str | os.PathLike[str], path: str | os.PathLike[str]) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""

    relative = Path(path).relative_to(root).as_posix()
    return relative.lstrip("/")


def copy_stream(source: IO[bytes], target: IO[bytes], bufsize: int = DEFAULT_BUFFER_SIZE) -> None:
    shutil.copyfileobj(source, target, bufsize)


def close_quietly(stream: Any) -> None:
    """Close ``stream`` ignoring any failure; ``None`` is accepted."""

    if stream is None:
        return
    try:
        stream.close()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Ignoring failure while closing %r: %s", stream, exc)


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "close_quietly",
    "copy_stream",
    "main_name",
    "mkdirs",
    "sub_path",
    "touch",
]
