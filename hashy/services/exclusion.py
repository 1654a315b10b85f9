"""Directory exclusion by absolute path prefix."""
from __future__ import annotations

import os
from typing import Iterable

from ..core.config import normalize_exclusion


class ExclusionFilter:
    """Decides whether a path lies under one of the excluded directories.

    Prefixes carry a trailing separator, so ``/home/user`` excludes
    ``/home/user/notes`` but not ``/home/username/notes``.
    """

    def __init__(self, prefixes: Iterable[str] = ()):
        self._prefixes = tuple(normalize_exclusion(p) for p in prefixes if p)

    @property
    def prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    def is_excluded(self, path: str) -> bool:
        if not self._prefixes:
            return False
        candidate = os.path.abspath(path)
        return candidate.startswith(self._prefixes)
