"""Command line entry point: hashy [-hv] [-a algorithm] [-w number] [-x path1,path2] path"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Optional

from . import __version__
from .core.config import HashAlgorithm, build_config, default_worker_count
from .core.errors import ConfigurationError, HashyError, OutputClosedError
from .logging.rich_logger import ConsoleResultSink, setup_logging
from .services.pool import hash_directory


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hashy",
        description="Recursively hash every file in supplied path, writing the hash to stdout.",
        epilog="Example: hashy -a sha256 -x $HOME/Library,$HOME/.lima ~/",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default="./",
        help="Directory to hash (default: current directory)",
    )
    parser.add_argument(
        "-a", "--algorithm",
        type=str,
        default=HashAlgorithm.md5.value,
        metavar="ALGORITHM",
        help=f"Hash algorithm: {', '.join(HashAlgorithm.names())} (default: md5)",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=None,
        metavar="NUMBER",
        help=f"Number of workers (default: {default_worker_count()})",
    )
    parser.add_argument(
        "-x", "--exclude",
        type=str,
        default="",
        metavar="PATH1,PATH2",
        help="Comma-separated list of directories to exclude",
    )
    parser.add_argument(
        "--show-errors",
        action="store_true",
        help="Show normally-suppressed errors (like skipping non-regular files)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"hashy version: {__version__}",
        help="Show version number",
    )
    return parser


def parse_exclude_list(raw: str) -> tuple[str, ...]:
    """Split the comma-separated --exclude value, dropping empty entries."""
    return tuple(entry for entry in raw.split(",") if entry.strip())


def silence_stdout() -> None:
    """Point stdout at devnull so the flush at interpreter exit cannot fail again."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        # Replaced or captured stdout, no descriptor to redirect
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = create_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    sink = ConsoleResultSink(verbose=args.debug)

    try:
        config = build_config(
            root=args.path,
            workers=args.workers,
            algorithm=args.algorithm,
            exclude=parse_exclude_list(args.exclude),
            show_errors=args.show_errors,
            debug=args.debug,
        )
    except ConfigurationError as e:
        sink.print_error(str(e))
        return 1

    try:
        stats = hash_directory(config, sink)
    except OutputClosedError:
        silence_stdout()
        return 1
    except HashyError as e:
        sink.print_error(str(e))
        return 1
    except KeyboardInterrupt:
        sink.print_error("interrupted")
        return 130

    sink.print_stats(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
