"""Digest engines."""
from .digest import DigestEngine, create_digest_engine

__all__ = [
    "DigestEngine",
    "create_digest_engine",
]
