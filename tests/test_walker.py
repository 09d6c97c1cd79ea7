"""
Tests for directory expansion.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from udv.core import NotFoundError, TreeWalker


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(path.name)
    return path


class TestTreeWalker:
    """Test file enumeration."""

    def test_single_file(self, tmp_path: Path) -> None:
        """Test a file root yields exactly itself."""
        path = touch(tmp_path / "file.bin")

        assert list(TreeWalker().iter_files(path)) == [path]

    def test_directory_is_lexicographic(self, tmp_path: Path) -> None:
        """Test recursive walk order is deterministic."""
        touch(tmp_path / "b.txt")
        touch(tmp_path / "a" / "z.txt")
        touch(tmp_path / "a" / "nested" / "y.txt")
        touch(tmp_path / "c" / "x.txt")

        files = [p.relative_to(tmp_path).as_posix() for p in TreeWalker().iter_files(tmp_path)]

        assert files == ["a/nested/y.txt", "a/z.txt", "b.txt", "c/x.txt"]

    def test_control_dir_excluded_at_any_depth(self, tmp_path: Path) -> None:
        """Test .udv directories are pruned wherever they appear."""
        touch(tmp_path / "keep.txt")
        touch(tmp_path / ".udv" / "cache" / "ab" / "cdef")
        touch(tmp_path / "deep" / "er" / ".udv" / "config")
        touch(tmp_path / "deep" / "er" / "keep.txt")

        files = [p.relative_to(tmp_path).as_posix() for p in TreeWalker().iter_files(tmp_path)]

        assert files == ["deep/er/keep.txt", "keep.txt"]

    def test_other_dotfiles_are_included(self, tmp_path: Path) -> None:
        """Test nothing but the control directory is excluded."""
        touch(tmp_path / ".hidden" / "file")
        touch(tmp_path / "data.bin.dvc")

        files = [p.relative_to(tmp_path).as_posix() for p in TreeWalker().iter_files(tmp_path)]

        assert files == [".hidden/file", "data.bin.dvc"]

    def test_missing_root_fails_eagerly(self, tmp_path: Path) -> None:
        """Test NotFoundError is raised before any iteration."""
        with pytest.raises(NotFoundError):
            TreeWalker().iter_files(tmp_path / "missing.bin")

    def test_restartable(self, tmp_path: Path) -> None:
        """Test each call performs a fresh traversal."""
        touch(tmp_path / "a.txt")
        walker = TreeWalker()
        first = list(walker.iter_files(tmp_path))

        touch(tmp_path / "b.txt")
        second = list(walker.iter_files(tmp_path))

        assert len(first) == 1
        assert len(second) == 2

    def test_is_lazy(self, tmp_path: Path) -> None:
        """Test entries are discovered as the iterator advances."""
        touch(tmp_path / "a" / "one.txt")
        (tmp_path / "b").mkdir()
        iterator = TreeWalker().iter_files(tmp_path)
        first = next(iterator)

        touch(tmp_path / "b" / "two.txt")

        assert first.name == "one.txt"
        assert [p.name for p in iterator] == ["two.txt"]

    def test_symlinks_are_yielded_not_followed(self, tmp_path: Path) -> None:
        """Test links are reported to the caller and linked directories are not entered."""
        target_dir = tmp_path / "outside"
        touch(target_dir / "secret.txt")
        root = tmp_path / "root"
        touch(root / "real.txt")
        os.symlink(target_dir, root / "linked-dir")
        os.symlink(root / "real.txt", root / "linked-file")

        files = [p.relative_to(root).as_posix() for p in TreeWalker().iter_files(root)]

        assert files == ["linked-dir", "linked-file", "real.txt"]
