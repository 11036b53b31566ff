from __future__ import annotations

import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner


# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package. Pytest executes from the repository root where the
# ``src`` layout is not on ``sys.path`` by default, so the treezip package would
# otherwise be missing.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch, tmp_path):
    """Point treezip at an empty config directory and drop env overrides."""

    home = tmp_path / "treezip-home"
    monkeypatch.setenv("TREEZIP_HOME", str(home))
    for name in ("TREEZIP_COMPRESS_LEVEL", "TREEZIP_BUFFER_SIZE", "TREEZIP_SAFE_EXTRACT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("TREEZIP_DEBUG", raising=False)
    return home


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    """``src/a.txt`` = hello, ``src/sub/b.txt`` = world."""

    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "a.txt").write_text("hello", encoding="utf-8")
    (src / "sub" / "b.txt").write_text("world", encoding="utf-8")
    return src
