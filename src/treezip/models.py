from __future__ import annotations

import zipfile

from pydantic import BaseModel, computed_field


class EntryInfo(BaseModel):
    name: str
    is_dir: bool = False
    size: int = 0
    compressed_size: int = 0
    crc: int = 0

    @classmethod
    def from_zipinfo(cls, info: zipfile.ZipInfo) -> "EntryInfo":
        return cls(
            name=info.filename,
            is_dir=info.is_dir(),
            size=info.file_size,
            compressed_size=info.compress_size,
            crc=info.CRC,
        )


class ArchiveListing(BaseModel):
    """Entries of an archive in stored order."""

    path: str
    entries: list[EntryInfo] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def file_count(self) -> int:
        return sum(1 for entry in self.entries if not entry.is_dir)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self.entries)


__all__ = ["ArchiveListing", "EntryInfo"]
