"""Worker pool that hashes files pulled from a bounded queue.

The calling thread is the producer: it walks the tree and pushes FileTasks
into a queue whose capacity equals the worker count, so the walk can never
run far ahead of hashing. N worker threads pull tasks, classify them, hash
them and report to the ResultSink.

Fatal errors (stat failure, read failure, walk failure) cancel the pool:
workers finish the file they are on and exit, the producer stops
enqueuing, and the error is re-raised from ``hash_directory``. A closed
stdout (``BrokenPipeError`` from the sink) cancels the same way and
surfaces as ``OutputClosedError``.
"""
from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Optional

from ..core.config import HashyConfig
from ..core.errors import (
    HashyError,
    OutputClosedError,
    StatFailedError,
    UnsupportedFileError,
    WalkError,
)
from ..core.models import ErrorKind, FileTask, OutcomeKind, PoolState, RunStats
from ..core.protocols import ResultSink
from ..engines.digest import DigestEngine
from .classifier import classify, describe_mode
from .exclusion import ExclusionFilter
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)

STOP_SENTINEL = None
POLL_INTERVAL = 0.1  # Seconds between checks of the stop event while blocked


class WorkerPool:
    """Fixed set of hashing threads fed by a bounded FIFO queue."""

    def __init__(
        self,
        config: HashyConfig,
        sink: ResultSink,
        engine: Optional[DigestEngine] = None,
        stats: Optional[RunStats] = None,
    ):
        """Initialize the pool. Workers are not started until ``start()``.

        Args:
            config: Run configuration (worker count, visibility flags).
            sink: Receives results and diagnostics from every worker.
            engine: Digest engine shared by all workers.
            stats: Counters to update; a fresh RunStats if omitted.
        """
        self._config = config
        self._sink = sink
        self._engine = engine or DigestEngine(config.algorithm)
        self._stats = stats if stats is not None else RunStats()
        self._queue: queue.Queue[Optional[FileTask]] = queue.Queue(maxsize=config.workers)
        self._threads: list[threading.Thread] = []
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._state = PoolState.IDLE
        self._fatal: Optional[HashyError] = None

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def stats(self) -> RunStats:
        return self._stats

    @property
    def fatal_error(self) -> Optional[HashyError]:
        return self._fatal

    # --- Lifecycle ---

    def start(self) -> None:
        with self._lock:
            if self._state != PoolState.IDLE:
                raise RuntimeError(f"pool already started (state: {self._state.value})")
            for worker_id in range(self._config.workers):
                thread = threading.Thread(
                    target=self._run_worker,
                    args=(worker_id,),
                    name=f"hashy-worker-{worker_id}",
                    daemon=True,
                )
                self._threads.append(thread)
            self._state = PoolState.RUNNING

        for thread in self._threads:
            thread.start()
        logger.debug("Started %d workers (%s)", len(self._threads), self._engine.name)

    def submit(self, task: FileTask) -> bool:
        """Queue a task, blocking while the queue is full.

        Returns:
            False if the pool was cancelled before the task could be queued.
        """
        if self._state not in (PoolState.RUNNING, PoolState.CANCELLED):
            raise RuntimeError(f"pool is not accepting tasks (state: {self._state.value})")
        if not self._put(task):
            return False
        self._stats.record_enumerated()
        return True

    def close(self) -> None:
        """Stop accepting tasks; workers exit once the queue is drained."""
        with self._lock:
            if self._state != PoolState.RUNNING:
                return
            self._state = PoolState.DRAINING

        # One sentinel per worker, queued behind every pending task
        for _ in self._threads:
            if not self._put(STOP_SENTINEL):
                break
        logger.debug("Work queue closed")

    def join(self) -> None:
        """Block until every worker has exited."""
        for thread in self._threads:
            thread.join()
        with self._lock:
            if self._state != PoolState.CANCELLED:
                self._state = PoolState.DONE
        logger.debug("All workers done (state: %s)", self._state.value)

    def cancel(self, error: Optional[HashyError] = None) -> None:
        """Stop all workers after their current file. The first error wins."""
        with self._lock:
            if error is not None and self._fatal is None:
                self._fatal = error
            self._state = PoolState.CANCELLED
        if not self._stop.is_set():
            logger.debug("Cancelling pool: %s", error)
        self._stop.set()

    # --- Internals ---

    def _put(self, item: Optional[FileTask]) -> bool:
        while not self._stop.is_set():
            try:
                self._queue.put(item, timeout=POLL_INTERVAL)
                return True
            except queue.Full:
                continue
        return False

    def _run_worker(self, worker_id: int) -> None:
        while not self._stop.is_set():
            try:
                task = self._queue.get(timeout=POLL_INTERVAL)
            except queue.Empty:
                continue

            if task is STOP_SENTINEL:
                break

            try:
                self._process(worker_id, task)
            except BrokenPipeError as e:
                self._output_closed(e)
            except Exception as e:
                logger.exception("Worker %d crashed on %s", worker_id, task.path)
                error = HashyError(f"worker {worker_id} failed on {task.path}: {e}")
                self._stats.record(error.kind)
                self.cancel(error)

        if self._config.debug:
            try:
                self._sink.debug(worker_id, "worker done")
            except BrokenPipeError as e:
                self._output_closed(e)

    def _output_closed(self, cause: BrokenPipeError) -> None:
        # Reader of stdout is gone
        self._stats.record(ErrorKind.OUTPUT_CLOSED)
        self.cancel(OutputClosedError(cause))

    def _process(self, worker_id: int, task: FileTask) -> None:
        debug = self._config.debug
        if debug:
            self._sink.debug(worker_id, f"statting {task.path}")

        outcome = classify(task.path)
        if debug and outcome.kind != OutcomeKind.STAT_FAILED:
            self._sink.debug(worker_id, f"{describe_mode(outcome.mode)} {task.path}")
        match outcome.kind:
            case OutcomeKind.STAT_FAILED:
                self._handle_error(StatFailedError(task.path, outcome.cause))
                return
            case OutcomeKind.UNSUPPORTED:
                self._handle_error(UnsupportedFileError(task.path, outcome.reason))
                return

        if debug:
            self._sink.debug(worker_id, f"hashing {task.path}")
        try:
            result = self._engine.hash_file(task.path)
        except HashyError as e:
            self._handle_error(e)
            return

        if debug:
            self._sink.debug(worker_id, result.line)
        else:
            self._sink.result(result)
        self._stats.record(None)

    def _handle_error(self, error: HashyError) -> None:
        self._stats.record(error.kind)
        match error.kind:
            case ErrorKind.UNSUPPORTED:
                if self._config.show_errors:
                    self._sink.unsupported(error)
            case ErrorKind.OPEN_FAILED:
                self._sink.error(error)
            case _:
                self.cancel(error)


def hash_directory(
    config: HashyConfig,
    sink: ResultSink,
    scanner: Optional[DirectoryScanner] = None,
    engine: Optional[DigestEngine] = None,
) -> RunStats:
    """Hash every eligible file under ``config.root``.

    Starts the pool, walks the tree on the calling thread, closes the queue
    and waits for the workers.

    Returns:
        Counters for the run.

    Raises:
        HashyError: the first fatal error seen by the walk or a worker.
    """
    scanner = scanner or DirectoryScanner(ExclusionFilter(config.exclude))
    stats = RunStats()
    pool = WorkerPool(config, sink, engine=engine, stats=stats)

    started = time.monotonic()
    pool.start()
    try:
        for task in scanner.scan(config.root):
            if not pool.submit(task):
                break
    except WalkError as e:
        pool.cancel(e)
    except BaseException:
        pool.cancel()
        raise
    finally:
        pool.close()
        pool.join()
        stats.elapsed_seconds = time.monotonic() - started

    if pool.fatal_error is not None:
        raise pool.fatal_error
    return stats
