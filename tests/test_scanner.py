"""Tests for directory size scanning."""

import os
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import MB, make_file
from marksize.scanner import (
    BYTES_PER_MB,
    bytes_to_mb,
    compile_filter,
    expand_path,
    scan,
    scan_bytes,
)


class TestExpandPath:
    def test_expands_tilde(self):
        result = expand_path("~/test")
        assert str(result).startswith(str(Path.home()))

    def test_handles_absolute_path(self):
        result = expand_path("/absolute/path")
        assert str(result) == "/absolute/path"


class TestCompileFilter:
    def test_none_matches_everything(self):
        assert compile_filter(None) is None

    def test_empty_string_matches_everything(self):
        assert compile_filter("") is None

    def test_string_becomes_regex(self):
        pattern = compile_filter(r"\.flac$")
        assert pattern.search("song.flac")
        assert not pattern.search("song.mp3")

    def test_precompiled_pattern_passes_through(self):
        pattern = re.compile("mp3")
        assert compile_filter(pattern) is pattern

    def test_invalid_regex_raises(self):
        with pytest.raises(re.error):
            compile_filter("[unclosed")


class TestBytesToMb:
    def test_truncates_by_default(self):
        assert bytes_to_mb(BYTES_PER_MB * 2 - 1) == 1

    def test_precise_keeps_fraction(self):
        assert bytes_to_mb(BYTES_PER_MB + BYTES_PER_MB // 2, precise=True) == 1.5

    def test_zero(self):
        assert bytes_to_mb(0) == 0


class TestScanBytes:
    def test_empty_directory(self, tmp_path):
        assert scan_bytes(tmp_path) == 0

    def test_nested_files(self, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        (tmp_path / "sub" / "deeper").mkdir(parents=True)
        (tmp_path / "sub" / "deeper" / "b.txt").write_text("world!")

        assert scan_bytes(tmp_path) == 11

    def test_filter_applies_to_file_names(self, tmp_path):
        (tmp_path / "keep.flac").write_text("12345")
        (tmp_path / "skip.txt").write_text("123")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "also.flac").write_text("12")

        assert scan_bytes(tmp_path, r"\.flac$") == 7

    def test_substring_filter(self, tmp_path):
        (tmp_path / "live-set.wav").write_text("1234")
        (tmp_path / "studio.wav").write_text("12")

        assert scan_bytes(tmp_path, "live") == 4

    def test_filter_does_not_match_directory_names(self, tmp_path):
        (tmp_path / "flac").mkdir()
        (tmp_path / "flac" / "notes.txt").write_text("123")

        assert scan_bytes(tmp_path, "flac") == 0

    def test_single_file(self, tmp_path):
        f = tmp_path / "one.bin"
        f.write_bytes(b"x" * 42)

        assert scan_bytes(f) == 42

    def test_single_file_respects_filter(self, tmp_path):
        f = tmp_path / "one.bin"
        f.write_bytes(b"x" * 42)

        assert scan_bytes(f, r"\.flac$") == 0

    def test_missing_path_is_zero(self, tmp_path):
        assert scan_bytes(tmp_path / "nope") == 0

    def test_symlinks_not_followed(self, tmp_path):
        target = tmp_path / "target"
        make_file(target / "big.bin", 5 * MB)
        root = tmp_path / "root"
        root.mkdir()
        (root / "small.txt").write_text("abc")
        os.symlink(target, root / "link")

        assert scan_bytes(root) == 3

    def test_listing_error_contributes_zero(self, tmp_path):
        """A subtree that cannot be listed is skipped, the rest still counts."""
        (tmp_path / "ok.txt").write_text("1234")
        bad = tmp_path / "bad"
        bad.mkdir()
        (bad / "hidden.txt").write_text("123456")

        real_scandir = os.scandir

        def flaky_scandir(path):
            if str(path) == str(bad):
                raise PermissionError("Access denied")
            return real_scandir(path)

        with patch("marksize.scanner.os.scandir", side_effect=flaky_scandir):
            assert scan_bytes(tmp_path) == 4

    def test_deeply_nested_tree(self, tmp_path):
        deepest = tmp_path
        for _ in range(1100):
            deepest = deepest / "d"
            deepest.mkdir()
        make_file(deepest / "bottom.bin", 2 * MB)

        assert scan(tmp_path) == 2

    def test_inaccessible_directory_treated_as_file(self, tmp_path):
        (tmp_path / "inside.txt").write_text("123")

        with patch("marksize.scanner.os.access", return_value=False):
            # Measured as a single leaf: the directory entry's own size
            assert scan_bytes(tmp_path) == tmp_path.stat().st_size


class TestScan:
    def test_music_library_scenario(self, music_tree):
        assert scan(music_tree) == 750

    def test_result_is_independent_of_traversal_order(self, music_tree):
        real_scandir = os.scandir

        class Reversed:
            def __init__(self, path):
                self._it = real_scandir(path)
                self._entries = list(self._it)[::-1]

            def __enter__(self):
                return iter(self._entries)

            def __exit__(self, *exc):
                self._it.close()

        expected = scan(music_tree)
        with patch("marksize.scanner.os.scandir", Reversed):
            assert scan(music_tree) == expected

    def test_idempotent(self, music_tree):
        assert scan(music_tree) == scan(music_tree)

    def test_truncates_partial_megabytes(self, tmp_path):
        make_file(tmp_path / "f.bin", 3 * MB - 1)
        assert scan(tmp_path) == 2

    def test_precise(self, tmp_path):
        make_file(tmp_path / "f.bin", 3 * MB // 2)
        assert scan(tmp_path, precise=True) == 1.5

    def test_filter(self, music_tree):
        make_file(music_tree / "cover.jpg", 10 * MB)
        assert scan(music_tree, r"\.flac$") == 750
        assert scan(music_tree) == 760

    def test_accepts_string_path(self, music_tree):
        assert scan(str(music_tree)) == 750
