"""Destination checks run before an archive is written."""

from __future__ import annotations

import os
from pathlib import Path

from .errors import InvalidDestinationError, SourceNotFoundError
from .fileutil import touch


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def validate(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    """Ensure ``dest`` may receive an archive of ``src``.

    Raises :class:`SourceNotFoundError` when ``src`` is missing and
    :class:`InvalidDestinationError` when the archive would be written into the
    directory being archived, or over the single file being archived. A missing
    ``dest`` is created as an empty placeholder.
    """

    source = Path(src)
    target = Path(dest)
    if not source.exists():
        raise SourceNotFoundError(source)

    canonical_src = source.resolve()
    if source.is_dir():
        parent = target.absolute().parent.resolve()
        if _is_within(parent, canonical_src):
            raise InvalidDestinationError(
                source,
                target,
                f"Destination {target} must not be inside the source directory {canonical_src}",
            )
    elif target.exists() and target.resolve() == canonical_src:
        raise InvalidDestinationError(
            source, target, f"Destination {target} would overwrite the source file"
        )

    if not target.exists():
        touch(target)


__all__ = ["validate"]
