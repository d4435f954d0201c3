"""
Unit tests for the filesystem walker module.

Tests directory traversal, name matching, permission handling and
error reporting of the FSWalker class.
"""

import os
import errno
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch, MagicMock
import pytest

from ff15.tools.fs_walker import FSWalker, find_files
from ff15.models.config import FinderConfig
from ff15.models.search_query import SearchQuery


def quiet_config():
    return FinderConfig(spinner={'enabled': False})


class TestFSWalker:
    """Test cases for the FSWalker class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir)
        self._create_test_structure()
        self.walker = FSWalker(quiet_config())

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            for current_dir, subdirs, _ in os.walk(self.temp_dir):
                for name in subdirs:
                    os.chmod(os.path.join(current_dir, name), 0o755)
            shutil.rmtree(self.temp_dir)

    def _create_test_structure(self):
        """Create a small game-like directory tree."""
        test_files = [
            "virmox.txt",
            "virmox_backup.txt",
            "saves/slot1.sav",
            "saves/VIRMOX.dat",
            "data/textures/sky.png",
            "readme.md",
        ]

        for file_path in test_files:
            full_path = self.test_root / file_path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(f"Content of {file_path}")

    def test_walk_substring_matches(self):
        """Test that names containing the stripped term are found."""
        result = self.walker.walk(self.test_root, "virmox.txt")

        found = sorted(os.path.relpath(p, self.temp_dir) for p in result.paths)
        assert found == sorted([
            "virmox.txt",
            "virmox_backup.txt",
            os.path.join("saves", "VIRMOX.dat"),
        ])
        assert not result.has_error()

    def test_paths_are_joined_to_root(self):
        """Test that paths are built from the root as given."""
        result = self.walker.walk(self.temp_dir, "readme.md")

        assert result.paths == [os.path.join(self.temp_dir, "readme.md")]
        assert result.root == self.temp_dir

    def test_no_match(self):
        """Test that a term found nowhere gives an empty, error-free result."""
        result = self.walker.walk(self.test_root, "nomatch")

        assert result.is_empty()
        assert not result.has_error()

    def test_directories_are_not_candidates(self):
        """Test that directory names never match."""
        result = self.walker.walk(self.test_root, "textures")

        assert result.is_empty()

    def test_extension_only_query_matches_every_file(self):
        """Test that an empty normalized term lists all files."""
        result = self.walker.walk(self.test_root, ".txt")

        assert len(result.paths) == 6

    def test_empty_tree(self):
        """Test walking a directory without files."""
        with tempfile.TemporaryDirectory() as empty_dir:
            os.mkdir(os.path.join(empty_dir, "sub"))
            result = self.walker.walk(empty_dir, "anything")

        assert result.is_empty()
        assert not result.has_error()

    def test_file_root_is_its_own_candidate(self):
        """Test that a file given as root is matched by itself."""
        file_root = self.test_root / "virmox.txt"

        assert self.walker.walk(file_root, "virmox").paths == [str(file_root)]
        assert self.walker.walk(file_root, "other").is_empty()

    def test_accepts_search_query(self):
        """Test that a SearchQuery instance is used as-is."""
        query = SearchQuery(text="slot1.sav")
        result = self.walker.walk(self.test_root, query)

        assert result.query is query
        assert len(result.paths) == 1

    def test_missing_root_is_an_error(self):
        """Test that a vanished root aborts the walk with an error."""
        result = self.walker.walk(self.test_root / "gone", "virmox")

        assert result.has_error()
        assert result.is_empty()

    @pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0,
                        reason="permissions are not enforced for root or on this platform")
    def test_permission_denied_directory_is_skipped(self):
        """Test that an unreadable directory is skipped without error."""
        locked = self.test_root / "locked"
        locked.mkdir()
        (locked / "virmox_secret.txt").write_text("hidden")
        os.chmod(locked, 0)

        result = self.walker.walk(self.test_root, "virmox.txt")

        assert not result.has_error()
        assert len(result.paths) == 3
        assert not any("locked" in p for p in result.paths)
        assert self.walker.get_stats()['permission_denied'] == 1

    def test_permission_error_from_walk_is_skipped(self):
        """Test the permission policy with a simulated unreadable directory."""
        def fake_walk(top, onerror=None):
            onerror(PermissionError(errno.EACCES, "Permission denied", os.path.join(top, "locked")))
            yield top, [], ["virmox.txt", "other.bin"]

        with patch("ff15.tools.fs_walker.os.walk", side_effect=fake_walk):
            result = self.walker.walk(self.temp_dir, "virmox.txt")

        assert not result.has_error()
        assert result.paths == [os.path.join(self.temp_dir, "virmox.txt")]
        assert self.walker.get_stats()['permission_denied'] == 1

    def test_other_error_aborts_with_partial_results(self):
        """Test that a non-permission error stops the walk but keeps earlier matches."""
        def fake_walk(top, onerror=None):
            yield top, ["broken"], ["virmox.txt"]
            onerror(OSError(errno.EIO, "Input/output error", os.path.join(top, "broken")))
            yield os.path.join(top, "later"), [], ["virmox_late.txt"]

        with patch("ff15.tools.fs_walker.os.walk", side_effect=fake_walk):
            result = self.walker.walk(self.temp_dir, "virmox")

        assert result.has_error()
        assert "Input/output error" in result.error
        assert result.paths == [os.path.join(self.temp_dir, "virmox.txt")]
        assert self.walker.get_stats()['errors'] == 1

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not available")
    def test_directory_symlink_is_matched_not_followed(self):
        """Test that a symlink to a directory is a candidate but not traversed."""
        link = self.test_root / "virmox_link"
        try:
            os.symlink(self.test_root / "saves", link, target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")

        result = self.walker.walk(self.test_root, "virmox")

        assert str(link) in result.paths
        assert not any(p.startswith(str(link) + os.sep) for p in result.paths)

    def test_spinner_runs_around_walk(self):
        """Test that a fresh spinner is started and stopped for every walk."""
        spinners = []

        def factory():
            spinner = MagicMock()
            spinners.append(spinner)
            return spinner

        walker = FSWalker(quiet_config(), spinner_factory=factory)
        walker.walk(self.test_root, "virmox")
        walker.walk(self.test_root, "slot1")

        assert len(spinners) == 2
        for spinner in spinners:
            spinner.start.assert_called_once_with()
            spinner.stop.assert_called_once_with()

    def test_spinner_stopped_on_error(self):
        """Test that the spinner is stopped when the walk fails."""
        spinner = MagicMock()
        walker = FSWalker(quiet_config(), spinner_factory=lambda: spinner)

        result = walker.walk(self.test_root / "gone", "virmox")

        assert result.has_error()
        spinner.stop.assert_called_once_with()

    def test_stats_tracking(self):
        """Test that statistics are properly tracked."""
        self.walker.walk(self.test_root, "virmox.txt")
        stats = self.walker.get_stats()

        assert stats['files_scanned'] == 6
        assert stats['files_matched'] == 3
        assert stats['directories_traversed'] == 4
        assert stats['permission_denied'] == 0
        assert stats['errors'] == 0

    def test_stats_reset_between_walks(self):
        """Test that each walk starts from zeroed counters."""
        self.walker.walk(self.test_root, "virmox")
        self.walker.walk(self.test_root, "nomatch")

        assert self.walker.get_stats()['files_matched'] == 0


class TestFindFiles:
    """Test cases for the find_files helper."""

    def test_example_tree(self):
        """Test the virmox example with a default-configured walker."""
        with tempfile.TemporaryDirectory() as root:
            for name in ("virmox.txt", "virmox_backup.txt"):
                Path(root, name).write_text("x")

            with patch("ff15.tools.fs_walker.create_spinner") as create_spinner:
                result = find_files(root, "virmox.txt")
                nothing = find_files(root, "nomatch")

        assert sorted(result.paths) == sorted([
            os.path.join(root, "virmox.txt"),
            os.path.join(root, "virmox_backup.txt"),
        ])
        assert nothing.is_empty() and not nothing.has_error()
        assert create_spinner.call_count == 2
