"""Service layer - classification, scanning and the worker pool."""
from .classifier import classify
from .exclusion import ExclusionFilter
from .scanner import DirectoryScanner
from .pool import WorkerPool, hash_directory

__all__ = [
    "classify",
    "ExclusionFilter",
    "DirectoryScanner",
    "WorkerPool",
    "hash_directory",
]
