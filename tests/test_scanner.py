"""
Unit tests for the tree scanner.
"""

import os
import tempfile
from pathlib import Path

import pytest

from password_mover.scanner import (
    TARGET_NAMES,
    count,
    is_target_name,
    scan,
    scan_top_level,
)
from password_mover.types import MatchedFile


def create_test_tree(structure: dict, base_path: Path) -> None:
    """
    Create a directory tree from a nested dict structure.

    Args:
        structure: Dict where keys are names; dict values are folders,
                   string values are file contents
        base_path: Base path to create the tree under
    """
    for name, children in structure.items():
        item_path = base_path / name
        if isinstance(children, dict):
            item_path.mkdir(parents=True, exist_ok=True)
            create_test_tree(children, item_path)
        else:
            item_path.write_text(children)


class TestIsTargetName:
    """Tests for is_target_name function."""

    def test_exact_names(self):
        """Both target names match."""
        assert is_target_name("password.txt")
        assert is_target_name("passwords.txt")

    def test_case_insensitive(self):
        """Letter case is ignored."""
        assert is_target_name("PasswordS.TXT")
        assert is_target_name("PASSWORD.txt")

    def test_near_misses(self):
        """Only exact base names qualify."""
        assert not is_target_name("my_password.txt")
        assert not is_target_name("password.txt.bak")
        assert not is_target_name("password")
        assert not is_target_name("passwords.md")

    def test_target_set(self):
        """The target set holds exactly the two lowercase names."""
        assert TARGET_NAMES == {"password.txt", "passwords.txt"}


class TestScan:
    """Tests for scan function."""

    def test_scan_empty_directory(self):
        """Empty directory yields nothing."""
        with tempfile.TemporaryDirectory() as tmp:
            assert list(scan(tmp)) == []

    def test_scan_is_lazy(self):
        """scan returns an iterator, not a list."""
        with tempfile.TemporaryDirectory() as tmp:
            result = scan(tmp)
            assert iter(result) is result

    def test_scan_nested_files(self):
        """Matches are found at every depth."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "password.txt": "a",
                "A": {
                    "passwords.txt": "b",
                    "B": {
                        "C": {"PASSWORD.TXT": "c"},
                    },
                },
            }, Path(tmp))

            names = sorted(m.name for m in scan(tmp))
            assert names == ["PASSWORD.TXT", "password.txt", "passwords.txt"]

    def test_scan_returns_full_paths(self):
        """MatchedFile paths point at the file on disk."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({"sub": {"password.txt": "x"}}, Path(tmp))

            matches = list(scan(tmp))

            assert len(matches) == 1
            assert Path(matches[0].path) == Path(tmp) / "sub" / "password.txt"
            assert Path(matches[0].path).read_text() == "x"

    def test_scan_ignores_directories_with_target_name(self):
        """A folder named password.txt is not a match, but is descended."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "password.txt": {"passwords.txt": "inner"},
            }, Path(tmp))

            matches = list(scan(tmp))

            assert len(matches) == 1
            assert matches[0].name == "passwords.txt"

    def test_scan_ignores_other_files(self):
        """Non-target files are skipped."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "notes.txt": "n",
                "password.doc": "d",
                "old_passwords.txt": "o",
            }, Path(tmp))

            assert list(scan(tmp)) == []

    def test_scan_missing_root_yields_nothing(self):
        """A root that does not exist is silently empty."""
        with tempfile.TemporaryDirectory() as tmp:
            assert list(scan(Path(tmp) / "nope")) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_scan_does_not_follow_symlink_cycles(self):
        """A directory link pointing at an ancestor does not loop."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            create_test_tree({"A": {"password.txt": "x"}}, base)
            try:
                os.symlink(base, base / "A" / "loop", target_is_directory=True)
            except OSError:
                pytest.skip("cannot create symlinks here")

            matches = list(scan(tmp))

            assert len(matches) == 1

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_scan_skips_file_symlinks(self):
        """A symlink named password.txt is not a regular file."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            (base / "real.txt").write_text("x")
            try:
                os.symlink(base / "real.txt", base / "password.txt")
            except OSError:
                pytest.skip("cannot create symlinks here")

            assert list(scan(tmp)) == []

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root"
    )
    def test_scan_skips_unreadable_directory(self):
        """Directories that cannot be listed are omitted without error."""
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            create_test_tree({
                "open": {"password.txt": "a"},
                "locked": {"password.txt": "b"},
            }, base)
            os.chmod(base / "locked", 0)
            try:
                matches = list(scan(tmp))
            finally:
                os.chmod(base / "locked", 0o755)

            assert [Path(m.path).parent.name for m in matches] == ["open"]


class TestScanTopLevel:
    """Tests for scan_top_level function."""

    def test_only_immediate_children(self):
        """Nested matches are not listed."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "PasswordS.TXT": "top",
                "A": {"passwords.txt": "nested"},
            }, Path(tmp))

            matches = list(scan_top_level(tmp))

            assert [m.name for m in matches] == ["PasswordS.TXT"]

    def test_missing_root_yields_nothing(self):
        """A root that does not exist is silently empty."""
        with tempfile.TemporaryDirectory() as tmp:
            assert list(scan_top_level(Path(tmp) / "nope")) == []


class TestCount:
    """Tests for count function."""

    def test_count_empty(self):
        """Empty tree counts zero."""
        with tempfile.TemporaryDirectory() as tmp:
            assert count(tmp) == 0

    def test_count_matches_scan(self):
        """Count equals the number of matching regular files at any depth."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({
                "A": {
                    "passwords.txt": "1",
                    "B": {"password.txt": "2", "other.txt": "x"},
                },
                "PasswordS.TXT": "3",
                "readme.md": "x",
            }, Path(tmp))

            assert count(tmp) == 3
            assert count(tmp) == len(list(scan(tmp)))

    def test_count_has_no_side_effects(self):
        """Counting leaves every file in place."""
        with tempfile.TemporaryDirectory() as tmp:
            create_test_tree({"password.txt": "x"}, Path(tmp))

            count(tmp)

            assert (Path(tmp) / "password.txt").exists()


class TestMatchedFile:
    """Tests for the MatchedFile data class."""

    def test_equality_by_path(self):
        """Entries with the same path are equal."""
        a = MatchedFile(name="password.txt", path="/x/password.txt")
        b = MatchedFile(name="PASSWORD.TXT", path="/x/password.txt")
        assert a == b

    def test_hashable(self):
        """Entries can be used in sets."""
        entries = {
            MatchedFile(name="password.txt", path="/x/password.txt"),
            MatchedFile(name="password.txt", path="/x/password.txt"),
            MatchedFile(name="password.txt", path="/y/password.txt"),
        }
        assert len(entries) == 2
