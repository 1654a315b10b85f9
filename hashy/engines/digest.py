"""Streaming digest engine.

Wraps one of the hashlib algorithms behind a "feed bytes, get hex" contract.
The algorithm is resolved once; every file gets a fresh hash object, so an
engine can be shared by all workers.
"""
from __future__ import annotations

import hashlib
import logging
from typing import BinaryIO

from ..core.config import HashAlgorithm
from ..core.errors import FileOpenError, ReadError, UnsupportedFileError
from ..core.models import HashResult

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class DigestEngine:
    """Computes content digests with a fixed algorithm."""

    def __init__(self, algorithm: HashAlgorithm = HashAlgorithm.md5, chunk_size: int = CHUNK_SIZE):
        """Initialize the engine.

        Args:
            algorithm: Which digest to compute.
            chunk_size: Bytes read per update call.
        """
        self._algorithm = algorithm
        self._chunk_size = chunk_size
        # Fail at startup, not on the first file
        hashlib.new(algorithm.value)

    @property
    def name(self) -> str:
        return self._algorithm.value

    def new(self):
        """Fresh hash object; never shared between files."""
        return hashlib.new(self._algorithm.value)

    def digest(self, stream: BinaryIO) -> str:
        """Stream ``stream`` to EOF and return the lowercase hex digest."""
        hasher = self.new()
        for chunk in iter(lambda: stream.read(self._chunk_size), b""):
            hasher.update(chunk)
        return hasher.hexdigest()

    def hash_file(self, path: str) -> HashResult:
        """Hash the file at ``path``.

        Raises:
            FileOpenError: the file could not be opened.
            UnsupportedFileError: the path turned out to be a directory.
            ReadError: reading failed part way through.
        """
        try:
            handle = open(path, "rb")
        except IsADirectoryError:
            raise UnsupportedFileError(path, "is a directory") from None
        except OSError as e:
            raise FileOpenError(path, e) from e

        with handle:
            try:
                hex_digest = self.digest(handle)
            except IsADirectoryError:
                raise UnsupportedFileError(path, "is a directory") from None
            except OSError as e:
                logger.debug("Read failed for %s: %s", path, e)
                raise ReadError(path, e) from e

        return HashResult(digest=hex_digest, path=path)


def create_digest_engine(algorithm: str | HashAlgorithm = HashAlgorithm.md5) -> DigestEngine:
    """Factory function to create a digest engine from a name or enum.

    Raises:
        ConfigurationError: if the algorithm name is not supported.
    """
    if not isinstance(algorithm, HashAlgorithm):
        algorithm = HashAlgorithm.from_name(algorithm)
    return DigestEngine(algorithm)
