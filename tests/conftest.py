"""Shared fixtures for marksize tests."""

from pathlib import Path

import pytest

MB = 1024 * 1024


def make_file(path: Path, size_bytes: int) -> Path:
    """Create a (sparse) file of exactly size_bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size_bytes)
    return path


@pytest.fixture
def music_tree(tmp_path):
    """/music with 400 MB and 350 MB of files spread over subdirectories."""
    root = tmp_path / "music"
    make_file(root / "album1" / "track1.flac", 250 * MB)
    make_file(root / "album1" / "track2.flac", 150 * MB)
    make_file(root / "album2" / "disc1" / "track1.flac", 350 * MB)
    return root


@pytest.fixture
def sized_dirs(tmp_path):
    """Directories a (300 MB), b (300 MB) and c (200 MB)."""
    dirs = {}
    for name, size in (("a", 300), ("b", 300), ("c", 200)):
        make_file(tmp_path / name / "data.bin", size * MB)
        dirs[name] = str(tmp_path / name)
    return dirs


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Never read the user's real config file."""
    monkeypatch.setenv("MARKSIZE_CONFIG", str(tmp_path / "no-such-config.toml"))
