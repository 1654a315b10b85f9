"""Test fixtures that build directory trees and know their expected digests."""
from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from pathlib import Path

import pytest


@dataclass
class TreeFixture:
    """A directory tree of regular files with known content.

    ``files`` maps a relative path to the bytes written there.
    """
    files: dict[str, bytes] = field(default_factory=dict)
    algorithm: str = "md5"

    def create(self, base_path: Path) -> Path:
        """Write every file under ``base_path`` and return it."""
        for rel, content in self.files.items():
            path = base_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return base_path

    def expected_lines(self, base_path: Path, skip: tuple[str, ...] = ()) -> set[str]:
        """The ``<digest> <path>`` lines a run over ``base_path`` should print."""
        lines = set()
        for rel, content in self.files.items():
            if rel.startswith(skip):
                continue
            digest = hashlib.new(self.algorithm, content).hexdigest()
            lines.add(f"{digest} {os.path.join(str(base_path), rel)}")
        return lines


def nested_tree() -> TreeFixture:
    return TreeFixture(files={
        "a": b"hello",
        "b": b"world",
        "docs/readme.txt": b"read me",
        "docs/deep/notes.md": b"# notes\n",
        "skip/file.txt": b"excluded content",
        "skip/inner/more.bin": bytes(range(256)),
        "empty": b"",
    })


def wide_tree(count: int = 200) -> TreeFixture:
    return TreeFixture(files={
        f"dir{i % 7}/file_{i:04d}.dat": f"content {i}".encode() * (i % 13 + 1)
        for i in range(count)
    })


def write_undecodable(base_path: Path, content: bytes = b"odd") -> Path:
    """Create ``bad\\xff`` (not valid UTF-8) under ``base_path``.

    Skips the calling test on filesystems that refuse such names.
    """
    path = base_path / os.fsdecode(b"bad\xff")
    try:
        path.write_bytes(content)
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects non-UTF-8 file names")
    return path
