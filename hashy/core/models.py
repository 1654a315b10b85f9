"""Domain models - immutable data classes."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """What went wrong while hashing, and whether the run can continue."""
    UNSUPPORTED = "unsupported"
    STAT_FAILED = "stat_failed"
    OPEN_FAILED = "open_failed"
    READ_FAILED = "read_failed"
    WALK_FAILED = "walk_failed"
    CONFIG_INVALID = "config_invalid"
    OUTPUT_CLOSED = "output_closed"  # Reader of stdout went away

    @property
    def fatal(self) -> bool:
        return self not in (ErrorKind.UNSUPPORTED, ErrorKind.OPEN_FAILED)


class OutcomeKind(Enum):
    """Result of inspecting a path before any byte is read."""
    HASHABLE = "hashable"
    UNSUPPORTED = "unsupported"
    STAT_FAILED = "stat_failed"


class PoolState(Enum):
    """Lifecycle of the worker pool."""
    IDLE = "idle"            # Created, workers not started
    RUNNING = "running"      # Queue open
    DRAINING = "draining"    # Queue closed, workers finishing
    DONE = "done"            # All workers exited
    CANCELLED = "cancelled"  # Fatal error stopped the pool


@dataclass(frozen=True, slots=True)
class FileTask:
    """One filesystem entry waiting to be hashed."""
    path: str


@dataclass(frozen=True, slots=True)
class HashResult:
    """Digest of a single file, ready for output."""
    digest: str
    path: str

    @property
    def line(self) -> str:
        return f"{self.digest} {self.path}"


@dataclass(frozen=True, slots=True)
class ClassificationOutcome:
    """Tagged outcome of classifying a path.

    ``reason`` is set for UNSUPPORTED, ``cause`` for STAT_FAILED, ``mode``
    (the lstat mode bits) whenever the stat succeeded.
    """
    kind: OutcomeKind
    reason: Optional[str] = None
    cause: Optional[OSError] = None
    mode: int = 0

    @classmethod
    def hashable(cls, mode: int = 0) -> "ClassificationOutcome":
        return cls(OutcomeKind.HASHABLE, mode=mode)

    @classmethod
    def unsupported(cls, reason: str, mode: int = 0) -> "ClassificationOutcome":
        return cls(OutcomeKind.UNSUPPORTED, reason=reason, mode=mode)

    @classmethod
    def stat_failed(cls, cause: OSError) -> "ClassificationOutcome":
        return cls(OutcomeKind.STAT_FAILED, cause=cause)

    @property
    def is_hashable(self) -> bool:
        return self.kind == OutcomeKind.HASHABLE


@dataclass(slots=True)
class RunStats:
    """Mutable counters for a hashing run, safe to update from workers."""
    enumerated: int = 0
    hashed: int = 0
    unsupported: int = 0
    errors: int = 0
    elapsed_seconds: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_enumerated(self) -> None:
        with self._lock:
            self.enumerated += 1

    def record(self, kind: Optional[ErrorKind]) -> None:
        """Record one finished task; ``None`` means it was hashed."""
        with self._lock:
            match kind:
                case None:
                    self.hashed += 1
                case ErrorKind.UNSUPPORTED:
                    self.unsupported += 1
                case _:
                    self.errors += 1

    @property
    def completed(self) -> int:
        return self.hashed + self.unsupported + self.errors

    def summary(self) -> dict[str, int]:
        return {
            "enumerated": self.enumerated,
            "hashed": self.hashed,
            "unsupported": self.unsupported,
            "errors": self.errors,
        }
