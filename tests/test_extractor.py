from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from treezip.config import ArchiveSettings
from treezip.errors import ArchiveIOError, SourceNotFoundError, UnsafeEntryError
from treezip.extractor import Extractor, entry_target


def _make_archive(path: Path, entries: list[tuple[str, bytes | None]]) -> Path:
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as z:
        for name, payload in entries:
            if payload is None:
                z.writestr(zipfile.ZipInfo(name), b"")
            else:
                z.writestr(name, payload)
    return path


def test_extract_files_and_directories(tmp_path: Path) -> None:
    archive = _make_archive(
        tmp_path / "mixed.zip",
        [
            ("docs/", None),
            ("docs/readme.md", b"# hi"),
            ("empty/", None),
            ("top.txt", b"top"),
        ],
    )
    dest = tmp_path / "out"

    result = Extractor().extract_all(archive, dest)

    assert result == dest
    assert (dest / "docs" / "readme.md").read_bytes() == b"# hi"
    assert (dest / "top.txt").read_bytes() == b"top"
    assert (dest / "empty").is_dir()
    assert list((dest / "empty").iterdir()) == []


def test_directory_only_entry_creates_directory(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "dirs.zip", [("a/b/c/", None)])

    Extractor().extract_all(archive, tmp_path / "out")

    assert (tmp_path / "out" / "a" / "b" / "c").is_dir()
    assert not any(path.is_file() for path in (tmp_path / "out").rglob("*"))


def test_file_entry_without_directory_entries_creates_parents(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "deep.zip", [("x/y/z.txt", b"deep")])

    Extractor().extract_all(archive, tmp_path / "new" / "dest")

    assert (tmp_path / "new" / "dest" / "x" / "y" / "z.txt").read_bytes() == b"deep"


def test_existing_files_are_overwritten(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "over.zip", [("note.txt", b"new")])
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "note.txt").write_bytes(b"old content that is longer")

    Extractor().extract_all(archive, dest)

    assert (dest / "note.txt").read_bytes() == b"new"


def test_parent_references_are_trusted_by_default(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "evil.zip", [("../escaped.txt", b"bad")])

    Extractor().extract_all(archive, tmp_path / "out")

    assert (tmp_path / "escaped.txt").read_bytes() == b"bad"


def test_absolute_names_are_joined_onto_destination(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "abs.zip", [("/rooted.txt", b"root")])

    Extractor().extract_all(archive, tmp_path / "out")

    assert (tmp_path / "out" / "rooted.txt").read_bytes() == b"root"
    assert entry_target(Path("/dest"), "/etc/passwd") == Path("/dest/etc/passwd")


def test_safe_extract_rejects_traversal(tmp_path: Path) -> None:
    archive = _make_archive(
        tmp_path / "evil.zip", [("ok.txt", b"fine"), ("../escaped.txt", b"bad")]
    )
    extractor = Extractor(ArchiveSettings(safe_extract=True))

    with pytest.raises(UnsafeEntryError, match="outside") as excinfo:
        extractor.extract_all(archive, tmp_path / "out")

    assert excinfo.value.entry == "../escaped.txt"
    assert (tmp_path / "out" / "ok.txt").read_bytes() == b"fine"
    assert not (tmp_path / "escaped.txt").exists()


def test_safe_extract_rejects_absolute_names(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "abs.zip", [("/rooted.txt", b"root")])

    with pytest.raises(UnsafeEntryError, match="absolute"):
        Extractor(ArchiveSettings(safe_extract=True)).extract_all(archive, tmp_path / "out")


def test_missing_archive(tmp_path: Path) -> None:
    with pytest.raises(SourceNotFoundError):
        Extractor().extract_all(tmp_path / "missing.zip", tmp_path / "out")

    assert not (tmp_path / "out").exists()


def test_not_a_zip_file(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.zip"
    bogus.write_text("definitely not a zip", encoding="utf-8")

    with pytest.raises(ArchiveIOError):
        Extractor().extract_all(bogus, tmp_path / "out")


def test_write_failure_aborts_extraction(monkeypatch, tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "ok.zip", [("a.txt", b"a"), ("b.txt", b"b")])

    def broken_copy(*_args, **_kwargs):
        raise OSError("no space left")

    monkeypatch.setattr("treezip.extractor.copy_stream", broken_copy)

    with pytest.raises(ArchiveIOError, match="a.txt") as excinfo:
        Extractor().extract_all(archive, tmp_path / "out")

    assert isinstance(excinfo.value.cause, OSError)
    assert not (tmp_path / "out" / "b.txt").exists()


def test_list_entries_keeps_stored_order(tmp_path: Path) -> None:
    archive = _make_archive(
        tmp_path / "order.zip", [("zeta.txt", b"zz"), ("alpha/", None), ("alpha/beta.txt", b"b")]
    )

    listing = Extractor().list_entries(archive)

    assert [entry.name for entry in listing.entries] == ["zeta.txt", "alpha/", "alpha/beta.txt"]
    assert [entry.is_dir for entry in listing.entries] == [False, True, False]
    assert listing.file_count == 2
    assert listing.total_size == 3
    assert listing.path == str(archive)


def _patch_central_directory(archive: Path, offset: int, value: int) -> None:
    """Overwrite one byte of the first central directory record."""

    data = bytearray(archive.read_bytes())
    record = data.find(b"PK\x01\x02")
    assert record != -1
    data[record + offset] = value
    archive.write_bytes(bytes(data))


def test_corrupt_deflate_stream_is_wrapped(tmp_path: Path) -> None:
    archive = tmp_path / "corrupt.zip"
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as z:
        z.writestr("a.txt", b"lorem ipsum dolor sit amet " * 200)
    data = bytearray(archive.read_bytes())
    start = 30 + len("a.txt")
    for index in range(start, start + 20):
        data[index] ^= 0xFF
    archive.write_bytes(bytes(data))

    with pytest.raises(ArchiveIOError, match="a.txt"):
        Extractor().extract_all(archive, tmp_path / "out")


def test_encrypted_entry_is_wrapped(tmp_path: Path) -> None:
    archive = tmp_path / "locked.zip"
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_STORED) as z:
        z.writestr("a.txt", b"secret")
    flags = archive.read_bytes()[archive.read_bytes().find(b"PK\x01\x02") + 8]
    _patch_central_directory(archive, 8, flags | 0x01)

    with pytest.raises(ArchiveIOError) as excinfo:
        Extractor().extract_all(archive, tmp_path / "out")

    assert isinstance(excinfo.value.cause, RuntimeError)


def test_unsupported_compression_is_wrapped(tmp_path: Path) -> None:
    archive = tmp_path / "exotic.zip"
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_STORED) as z:
        z.writestr("a.txt", b"payload")
    _patch_central_directory(archive, 10, 99)

    with pytest.raises(ArchiveIOError) as excinfo:
        Extractor().extract_all(archive, tmp_path / "out")

    assert isinstance(excinfo.value.cause, NotImplementedError)


def test_uncreatable_destination_is_wrapped(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "bundle", [("a.txt", b"a")])

    with pytest.raises(ArchiveIOError) as excinfo:
        Extractor().extract_all(archive, archive)

    assert isinstance(excinfo.value.cause, OSError)
    assert zipfile.is_zipfile(archive)
