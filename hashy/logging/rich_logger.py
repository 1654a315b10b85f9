"""Result sinks: plain results on stdout, Rich-formatted diagnostics on stderr."""
from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..core.errors import HashyError, UnsupportedFileError
from ..core.models import HashResult, RunStats


def setup_logging(debug: bool = False) -> None:
    """Route the package loggers through Rich on stderr."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logger = logging.getLogger("hashy")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def printable(text: str) -> str:
    """``text`` with undecodable filename bytes shown as ``\\xNN`` escapes."""
    return os.fsencode(text).decode(sys.getfilesystemencoding(), "backslashreplace")


class ConsoleResultSink:
    """Sink used by the CLI.

    Results go to stdout as ``<digest> <path>`` lines with no formatting so
    the output can be piped. Errors go to a Rich console on stderr.
    Implements the ResultSink protocol; all methods are thread-safe.
    """

    def __init__(self, verbose: bool = False):
        """Initialize the sink.

        Args:
            verbose: Print the summary table at the end of the run.
        """
        self._lock = threading.Lock()
        self._console = Console(stderr=True, highlight=False, emoji=False)
        self._debug_console = Console(highlight=False, emoji=False)
        self._verbose = verbose

    def result(self, result: HashResult) -> None:
        # Paths keep undecodable bytes as lone surrogates; emit the original bytes
        data = os.fsencode(f"{result.line}\n")
        with self._lock:
            stream = sys.stdout
            buffer = getattr(stream, "buffer", None)
            if buffer is None:
                stream.write(printable(result.line) + "\n")
            else:
                stream.flush()
                buffer.write(data)
            stream.flush()

    def unsupported(self, error: UnsupportedFileError) -> None:
        self.error(error)

    def error(self, error: HashyError) -> None:
        self.print_error(str(error))

    def print_error(self, message: str) -> None:
        with self._lock:
            sys.stdout.flush()
            self._console.print(
                f"Error: {printable(message)}", markup=False, style="red", soft_wrap=True
            )

    def debug(self, worker_id: int, message: str) -> None:
        line = f"{worker_id}: {printable(message)}"
        with self._lock:
            if self._debug_console.is_terminal:
                # Keep one line per event when watching a terminal
                self._debug_console.print(line, markup=False, no_wrap=True, overflow="ellipsis")
            else:
                self._debug_console.print(line, markup=False, soft_wrap=True)

    def print_stats(self, stats: RunStats) -> None:
        if not self._verbose:
            return

        table = Table(title="Hashing Complete", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="green", justify="right")

        table.add_row("Files Found", str(stats.enumerated))
        table.add_row("Files Hashed", str(stats.hashed))
        table.add_row("Unsupported", str(stats.unsupported))
        table.add_row("Errors", str(stats.errors))

        if stats.elapsed_seconds > 0:
            rate = stats.hashed / stats.elapsed_seconds
            table.add_row("", "")
            table.add_row("Time Elapsed", f"{stats.elapsed_seconds:.1f}s")
            table.add_row("Hashing Rate", f"{rate:.1f} files/sec")

        with self._lock:
            self._console.print(table)


class MemoryResultSink:
    """Sink that keeps everything in memory, for library use and tests."""

    def __init__(self):
        self._lock = threading.Lock()
        self.results: list[HashResult] = []
        self.unsupported_errors: list[UnsupportedFileError] = []
        self.errors: list[HashyError] = []
        self.debug_lines: list[str] = []
        self.stats: Optional[RunStats] = None

    def result(self, result: HashResult) -> None:
        with self._lock:
            self.results.append(result)

    def unsupported(self, error: UnsupportedFileError) -> None:
        with self._lock:
            self.unsupported_errors.append(error)

    def error(self, error: HashyError) -> None:
        with self._lock:
            self.errors.append(error)

    def debug(self, worker_id: int, message: str) -> None:
        with self._lock:
            self.debug_lines.append(f"{worker_id}: {message}")

    def print_stats(self, stats: RunStats) -> None:
        self.stats = stats

    @property
    def lines(self) -> set[str]:
        return {r.line for r in self.results}
