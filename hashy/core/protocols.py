"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from .errors import HashyError, UnsupportedFileError
from .models import HashResult, RunStats


class ResultSink(Protocol):
    """Where workers send results and diagnostics.

    Implementations must be safe to call from several worker threads.

    Implementations:
    - ConsoleResultSink: stdout results, rich stderr diagnostics
    - MemoryResultSink: collects everything in memory
    """

    @abstractmethod
    def result(self, result: HashResult) -> None:
        """Report a successfully hashed file."""
        ...

    @abstractmethod
    def unsupported(self, error: UnsupportedFileError) -> None:
        """Report a file that was skipped (shown only if errors are visible)."""
        ...

    @abstractmethod
    def error(self, error: HashyError) -> None:
        """Report an error that is always shown."""
        ...

    @abstractmethod
    def debug(self, worker_id: int, message: str) -> None:
        """Per-worker progress line (debug mode only)."""
        ...

    @abstractmethod
    def print_stats(self, stats: RunStats) -> None:
        """Summary at the end of a run."""
        ...
