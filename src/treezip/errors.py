from __future__ import annotations

from pathlib import Path
from typing import Optional


class TreezipError(Exception):
    """Base error for treezip."""


class SourceNotFoundError(TreezipError, FileNotFoundError):
    def __init__(self, path: str | Path) -> None:
        super().__init__(f"File {Path(path).absolute()} does not exist")
        self.path = Path(path)


class InvalidDestinationError(TreezipError, ValueError):
    def __init__(self, source: str | Path, destination: str | Path, message: str) -> None:
        super().__init__(message)
        self.source = Path(source)
        self.destination = Path(destination)


class ArchiveIOError(TreezipError):
    """Wraps the low-level failure that aborted an archive operation."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause


class UnsafeEntryError(TreezipError, ValueError):
    def __init__(self, entry: str, message: str) -> None:
        super().__init__(message)
        self.entry = entry


class ConfigError(TreezipError):
    """Raised when the treezip configuration is unreadable or invalid."""
