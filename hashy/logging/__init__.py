"""Logging package with Rich-based result sinks."""

from .rich_logger import ConsoleResultSink, MemoryResultSink, setup_logging

__all__ = ["ConsoleResultSink", "MemoryResultSink", "setup_logging"]
