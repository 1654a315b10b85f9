"""Concurrent recursive file hashing.

Walks a directory tree and hashes every regular file with a pool of
worker threads, printing ``<digest> <path>`` lines.
"""

__version__ = "1.0.0"

# Core exports
from .core.config import HashyConfig, HashAlgorithm, build_config
from .core.models import FileTask, HashResult, ClassificationOutcome, RunStats, PoolState
from .core.errors import HashyError, ConfigurationError, UnsupportedFileError
from .core.protocols import ResultSink

# Engine exports
from .engines.digest import DigestEngine, create_digest_engine

# Service exports
from .services.classifier import classify
from .services.exclusion import ExclusionFilter
from .services.scanner import DirectoryScanner
from .services.pool import WorkerPool, hash_directory

# Logging exports
from .logging.rich_logger import ConsoleResultSink, MemoryResultSink

__all__ = [
    # Core
    "HashyConfig",
    "HashAlgorithm",
    "build_config",
    "FileTask",
    "HashResult",
    "ClassificationOutcome",
    "RunStats",
    "PoolState",
    "HashyError",
    "ConfigurationError",
    "UnsupportedFileError",
    "ResultSink",
    # Engines
    "DigestEngine",
    "create_digest_engine",
    # Services
    "classify",
    "ExclusionFilter",
    "DirectoryScanner",
    "WorkerPool",
    "hash_directory",
    # Logging
    "ConsoleResultSink",
    "MemoryResultSink",
]
