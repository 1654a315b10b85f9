"""Core domain models, configuration and protocols."""
from .models import (
    ErrorKind,
    OutcomeKind,
    PoolState,
    FileTask,
    HashResult,
    ClassificationOutcome,
    RunStats,
)
from .errors import (
    HashyError,
    ConfigurationError,
    WalkError,
    UnsupportedFileError,
    StatFailedError,
    FileOpenError,
    ReadError,
    OutputClosedError,
)
from .config import HashyConfig, HashAlgorithm, build_config
from .protocols import ResultSink

__all__ = [
    # Models
    "ErrorKind",
    "OutcomeKind",
    "PoolState",
    "FileTask",
    "HashResult",
    "ClassificationOutcome",
    "RunStats",
    # Errors
    "HashyError",
    "ConfigurationError",
    "WalkError",
    "UnsupportedFileError",
    "StatFailedError",
    "FileOpenError",
    "ReadError",
    "OutputClosedError",
    # Config
    "HashyConfig",
    "HashAlgorithm",
    "build_config",
    # Protocols
    "ResultSink",
]
