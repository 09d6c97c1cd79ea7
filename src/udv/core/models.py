"""Core domain models."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import AddFailedError, ConfigError, UdvError

# Hex digest length per supported algorithm
DIGEST_LENGTHS = {
    "sha256": 64,
    "md5": 32,
}

DEFAULT_ALGORITHM = "sha256"

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def validate_algorithm(algorithm: str) -> str:
    """Normalise an algorithm name, raising ConfigError when unsupported."""
    if not isinstance(algorithm, str):
        raise ConfigError(f"Hash algorithm must be a string, got {algorithm!r}")
    name = algorithm.strip().lower()
    if name not in DIGEST_LENGTHS:
        supported = ", ".join(sorted(DIGEST_LENGTHS))
        raise ConfigError(f"Unsupported hash algorithm {algorithm!r} (supported: {supported})")
    return name


class Stage(Enum):
    """Steps of the add pipeline, used to attribute failures."""

    VALIDATING = "validating"
    EXPANDING = "expanding"
    HASHING = "hashing"
    STORING = "storing"
    MANIFEST_WRITING = "manifest_writing"
    IGNORE_RECORDING = "ignore_recording"


@dataclass(frozen=True)
class ContentIdentity:
    """Digest of a file's exact bytes; the deduplication key of the cache."""

    algorithm: str
    hexdigest: str

    def __post_init__(self) -> None:
        expected = DIGEST_LENGTHS.get(self.algorithm)
        if expected is None:
            raise ConfigError(f"Unsupported hash algorithm {self.algorithm!r}")
        if len(self.hexdigest) != expected or not set(self.hexdigest) <= _HEX_DIGITS:
            raise ValueError(
                f"Invalid {self.algorithm} digest {self.hexdigest!r}: "
                f"expected {expected} lowercase hex characters"
            )

    @property
    def shard(self) -> str:
        """First two hex characters, the cache shard directory."""
        return self.hexdigest[:2]

    @property
    def remainder(self) -> str:
        """Object filename within the shard."""
        return self.hexdigest[2:]

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.hexdigest}"


@dataclass(frozen=True)
class TrackedArtifact:
    """Manifest record binding a logical path to its content identity."""

    algorithm: str
    hash: str
    path: str
    size_bytes: int

    @classmethod
    def from_identity(cls, identity: ContentIdentity, path: str, size_bytes: int) -> TrackedArtifact:
        return cls(
            algorithm=identity.algorithm,
            hash=identity.hexdigest,
            path=path,
            size_bytes=size_bytes,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "hash": self.hash,
            "path": self.path,
            "size_bytes": self.size_bytes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrackedArtifact:
        size = int(data["size_bytes"])
        if size < 0:
            raise ValueError(f"size_bytes must be non-negative, got {size}")
        return cls(
            algorithm=data["algorithm"],
            hash=data["hash"],
            path=data["path"],
            size_bytes=size,
        )


@dataclass
class FileResult:
    """A file that went through every stage of the add pipeline."""

    path: str
    identity: ContentIdentity
    size_bytes: int
    cache_hit: bool
    ignore_added: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "algorithm": self.identity.algorithm,
            "hash": self.identity.hexdigest,
            "size_bytes": self.size_bytes,
            "cache_hit": self.cache_hit,
            "ignore_added": self.ignore_added,
        }


@dataclass
class FileFailure:
    """A file skipped because one of its stages failed."""

    path: str
    stage: Stage
    error: UdvError

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "stage": self.stage.value,
            "error": type(self.error).__name__,
            "message": self.error.message,
        }


@dataclass
class AddSummary:
    """Outcome of one add operation."""

    target: str
    is_directory: bool
    added: list[FileResult] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.added) + len(self.failures)

    @property
    def cache_hits(self) -> int:
        return sum(1 for result in self.added if result.cache_hit)

    def raise_for_failures(self) -> None:
        """Raise AddFailedError listing every failed file, if any."""
        if self.failures:
            raise AddFailedError(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "is_directory": self.is_directory,
            "added": [result.to_dict() for result in self.added],
            "failed": [failure.to_dict() for failure in self.failures],
            "cache_hits": self.cache_hits,
            "duration": round(self.duration, 3),
        }
