"""Directory scanning service."""
from __future__ import annotations

import logging
import os
from typing import Iterator, Optional

from ..core.errors import WalkError
from ..core.models import FileTask
from .exclusion import ExclusionFilter

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Walks a tree depth-first and yields a FileTask for every non-directory.

    Symbolic links are never followed; a link to a directory is yielded
    like any other entry so the classifier can report it. The exclusion
    filter is checked per entry and does not stop the walk from descending
    into excluded directories.
    """

    def __init__(self, exclusion: Optional[ExclusionFilter] = None):
        """Initialize the scanner.

        Args:
            exclusion: Filter applied to every discovered path.
        """
        self._exclusion = exclusion if exclusion is not None else ExclusionFilter()

    def scan(self, root: str) -> Iterator[FileTask]:
        """Yield a FileTask for each candidate file under ``root``.

        Raises:
            WalkError: a directory could not be listed.
        """
        if not os.path.isdir(root):
            if not self._exclusion.is_excluded(root):
                yield FileTask(root)
            return

        yield from self._scan_directory(root, root)

    def _scan_directory(self, directory: str, root: str) -> Iterator[FileTask]:
        """Scan a single directory."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            raise WalkError(root, directory, e) from e

        for entry in entries:
            path = os.path.join(directory, entry.name)
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise WalkError(root, path, e) from e

            if is_dir:
                yield from self._scan_directory(path, root)
                continue

            if self._exclusion.is_excluded(path):
                logger.debug("Excluded %s", path)
                continue

            yield FileTask(path)
