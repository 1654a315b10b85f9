"""File classification by metadata.

Named pipes and sockets can be opened but block forever on read, so the
type check has to come from ``lstat`` before anything is opened.
"""
from __future__ import annotations

import os
import stat

from ..core.models import ClassificationOutcome

NOT_REGULAR = "not a regular file"


def describe_mode(mode: int) -> str:
    """Short name for the file type in ``mode``, for debug output."""
    if stat.S_ISREG(mode):
        return "regular"
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISLNK(mode):
        return "symlink"
    if stat.S_ISFIFO(mode):
        return "fifo"
    if stat.S_ISSOCK(mode):
        return "socket"
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        return "device"
    return "unknown"


def classify(path: str) -> ClassificationOutcome:
    """Decide whether ``path`` can be hashed. Symlinks are not followed."""
    try:
        st = os.lstat(path)
    except OSError as e:
        return ClassificationOutcome.stat_failed(e)

    if not stat.S_ISREG(st.st_mode):
        return ClassificationOutcome.unsupported(NOT_REGULAR, st.st_mode)
    return ClassificationOutcome.hashable(st.st_mode)
