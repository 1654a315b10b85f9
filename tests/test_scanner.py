"""Tests for directory scanning."""
import os
from pathlib import Path

import pytest

from hashy.core.errors import WalkError
from hashy.core.models import FileTask
from hashy.services.exclusion import ExclusionFilter
from hashy.services.scanner import DirectoryScanner

from .fixtures import nested_tree


def scanned_paths(scanner: DirectoryScanner, root: Path) -> list[str]:
    return [task.path for task in scanner.scan(str(root))]


class TestDirectoryScanner:
    """Tests for DirectoryScanner."""

    @pytest.fixture
    def tree(self, tmp_path: Path) -> Path:
        return nested_tree().create(tmp_path)

    def test_yields_every_file(self, tree: Path):
        paths = scanned_paths(DirectoryScanner(), tree)
        expected = {os.path.join(str(tree), rel) for rel in nested_tree().files}
        assert set(paths) == expected
        assert len(paths) == len(expected)

    def test_yields_file_tasks(self, tree: Path):
        tasks = list(DirectoryScanner().scan(str(tree)))
        assert all(isinstance(task, FileTask) for task in tasks)

    def test_depth_first_lexical_order(self, tree: Path):
        rels = [os.path.relpath(p, tree) for p in scanned_paths(DirectoryScanner(), tree)]
        assert rels == [
            "a",
            "b",
            os.path.join("docs", "deep", "notes.md"),
            os.path.join("docs", "readme.txt"),
            "empty",
            os.path.join("skip", "file.txt"),
            os.path.join("skip", "inner", "more.bin"),
        ]

    def test_directories_not_emitted(self, tree: Path):
        paths = scanned_paths(DirectoryScanner(), tree)
        assert not any(os.path.isdir(p) for p in paths)

    def test_empty_directory(self, tmp_path: Path):
        (tmp_path / "sub" / "subsub").mkdir(parents=True)
        assert scanned_paths(DirectoryScanner(), tmp_path) == []

    def test_exclusion(self, tree: Path):
        scanner = DirectoryScanner(ExclusionFilter([str(tree / "skip")]))
        paths = scanned_paths(scanner, tree)
        assert not any(p.startswith(str(tree / "skip")) for p in paths)
        assert os.path.join(str(tree), "a") in paths
        assert len(paths) == 5

    def test_symlink_to_directory_emitted_not_followed(self, tmp_path: Path):
        target = tmp_path / "real"
        target.mkdir()
        (target / "inside.txt").write_text("x")
        (tmp_path / "link").symlink_to(target, target_is_directory=True)

        paths = scanned_paths(DirectoryScanner(), tmp_path)
        assert os.path.join(str(tmp_path), "link") in paths
        assert os.path.join(str(tmp_path), "link", "inside.txt") not in paths
        assert os.path.join(str(tmp_path), "real", "inside.txt") in paths

    def test_root_is_file(self, tmp_path: Path):
        path = tmp_path / "single"
        path.write_text("x")
        assert scanned_paths(DirectoryScanner(), path) == [str(path)]

    def test_is_lazy(self, tree: Path):
        iterator = DirectoryScanner().scan(str(tree))
        first = next(iterator)
        assert first.path == os.path.join(str(tree), "a")

    def test_unreadable_directory_raises(self, tree: Path, monkeypatch):
        real_scandir = os.scandir
        blocked = os.path.join(str(tree), "docs")

        def fake_scandir(path):
            if path == blocked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr("hashy.services.scanner.os.scandir", fake_scandir)

        with pytest.raises(WalkError) as exc_info:
            list(DirectoryScanner().scan(str(tree)))
        assert exc_info.value.path == blocked
        assert exc_info.value.root == str(tree)
        assert exc_info.value.fatal is True
