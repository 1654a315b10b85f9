"""Exception hierarchy for hashing runs.

Every error carries an ``ErrorKind`` so callers route on ``error.kind``
instead of on the exception class.
"""
from __future__ import annotations

from .models import ErrorKind


class HashyError(Exception):
    """Base exception for all hashing errors."""

    kind: ErrorKind = ErrorKind.READ_FAILED

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def fatal(self) -> bool:
        return self.kind.fatal


class ConfigurationError(HashyError):
    """Invalid algorithm, missing root path, bad worker count."""

    kind = ErrorKind.CONFIG_INVALID


class WalkError(HashyError):
    """Directory enumeration cannot continue."""

    kind = ErrorKind.WALK_FAILED

    def __init__(self, root: str, path: str, cause: BaseException):
        super().__init__(f"error walking {root} at {path}: {cause}")
        self.root = root
        self.path = path
        self.cause = cause


class UnsupportedFileError(HashyError):
    """Entry exists but is not something we can hash (pipe, socket, link)."""

    kind = ErrorKind.UNSUPPORTED

    def __init__(self, path: str, reason: str):
        super().__init__(f"unhashable file {path}: {reason}")
        self.path = path
        self.reason = reason


class StatFailedError(HashyError):
    kind = ErrorKind.STAT_FAILED

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"error statting {path}: {cause}")
        self.path = path
        self.cause = cause


class FileOpenError(HashyError):
    kind = ErrorKind.OPEN_FAILED

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"error opening {path}: {cause}")
        self.path = path
        self.cause = cause


class ReadError(HashyError):
    kind = ErrorKind.READ_FAILED

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"error reading {path}: {cause}")
        self.path = path
        self.cause = cause


class OutputClosedError(HashyError):
    """Whoever was reading the results stopped (``hashy dir | head``)."""

    kind = ErrorKind.OUTPUT_CLOSED

    def __init__(self, cause: BaseException):
        super().__init__(f"output closed: {cause}")
        self.cause = cause
