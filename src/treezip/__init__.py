"""Pack file trees into zip archives and unpack them again."""

from __future__ import annotations

import logging

from .api import list_entries, unzip_archive, zip_tree
from .archiver import Archiver
from .config import ArchiveSettings, ConfigStore
from .errors import (
    ArchiveIOError,
    ConfigError,
    InvalidDestinationError,
    SourceNotFoundError,
    TreezipError,
    UnsafeEntryError,
)
from .extractor import Extractor
from .models import ArchiveListing, EntryInfo

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ArchiveIOError",
    "ArchiveListing",
    "ArchiveSettings",
    "Archiver",
    "ConfigError",
    "ConfigStore",
    "EntryInfo",
    "Extractor",
    "InvalidDestinationError",
    "SourceNotFoundError",
    "TreezipError",
    "UnsafeEntryError",
    "list_entries",
    "unzip_archive",
    "zip_tree",
]
