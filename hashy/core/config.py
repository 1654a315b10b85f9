"""Run configuration, validated once at startup and never mutated."""
from __future__ import annotations

import os
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError


def default_worker_count() -> int:
    """CPUs this process may run on (affinity aware where the OS reports it)."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


class HashAlgorithm(str, Enum):
    """Supported digest algorithms (names as understood by hashlib)."""
    md5 = "md5"
    sha1 = "sha1"
    sha256 = "sha256"
    sha512 = "sha512"

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithm":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ConfigurationError(
                f"failed to initialise hasher: unsupported algorithm {name}. "
                "see hashy -h for list of supported options"
            ) from None

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


def normalize_exclusion(path: str) -> str:
    """Absolute form of ``path`` with exactly one trailing separator."""
    return os.path.join(os.path.abspath(os.path.expanduser(path)), "")


class HashyConfig(BaseModel):
    """Configuration for a hashing run.

    Constructed once and handed to the pool, workers and sink. Frozen, so
    it is safe to share between threads without locking.
    """
    model_config = ConfigDict(frozen=True)

    root: str = Field(default="./", description="Directory (or file) to hash")
    workers: int = Field(
        default_factory=default_worker_count,
        ge=1,
        description="Number of concurrent hashing workers",
    )
    algorithm: HashAlgorithm = Field(default=HashAlgorithm.md5, description="Digest algorithm")
    exclude: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Absolute directory prefixes to skip",
    )
    show_errors: bool = Field(default=False, description="Report unsupported files on stderr")
    debug: bool = Field(default=False, description="Per-worker progress instead of results")

    @field_validator("exclude", mode="before")
    @classmethod
    def normalize_exclude(cls, value: Iterable[str]) -> tuple[str, ...]:
        if isinstance(value, str):
            value = value.split(",")
        return tuple(normalize_exclusion(entry) for entry in value if entry.strip())


def build_config(
    root: str = "./",
    workers: Optional[int] = None,
    algorithm: str = HashAlgorithm.md5.value,
    exclude: Iterable[str] = (),
    show_errors: bool = False,
    debug: bool = False,
) -> HashyConfig:
    """Validate user input into a HashyConfig.

    Raises:
        ConfigurationError: unknown algorithm, missing root or bad worker count.
    """
    selected = HashAlgorithm.from_name(algorithm)

    try:
        os.stat(root)
    except FileNotFoundError:
        raise ConfigurationError(f"{root} does not exist.") from None
    except OSError as e:
        raise ConfigurationError(f"Error reading {root}: {e}") from None

    try:
        return HashyConfig(
            root=root,
            workers=workers if workers is not None else default_worker_count(),
            algorithm=selected,
            exclude=tuple(exclude),
            show_errors=show_errors,
            debug=debug,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"invalid configuration: {problems}") from None
