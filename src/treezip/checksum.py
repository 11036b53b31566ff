from __future__ import annotations

import zlib
from typing import IO


class ChecksumWriter:
    """Write-only stream wrapper keeping a rolling CRC-32 of everything written.

    The wrapper deliberately exposes neither ``tell`` nor ``seek`` so
    :class:`zipfile.ZipFile` streams entries with data descriptors instead of
    rewriting headers in place; the checksum therefore matches the bytes that end
    up on disk.
    """

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self.crc32 = 0
        self.bytes_written = 0

    def write(self, data: bytes) -> int:
        written = self._stream.write(data)
        self.crc32 = zlib.crc32(data, self.crc32)
        self.bytes_written += len(data)
        return written if written is not None else len(data)

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        self._stream.close()

    @property
    def hexdigest(self) -> str:
        return f"{self.crc32:08x}"


__all__ = ["ChecksumWriter"]
