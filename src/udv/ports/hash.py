"""Hash port interface."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from ..core.models import ContentIdentity


class HashPort(Protocol):
    """Port for content hashing."""

    @property
    def algorithm(self) -> str:
        """Name of the digest algorithm, e.g. "sha256"."""
        ...

    def new(self) -> HashState:
        """Start an incremental digest."""
        ...

    def digest(self, path: Path) -> str:
        """Compute the hex digest of a file."""
        ...

    def digest_stream(self, stream: BinaryIO) -> str:
        """Compute the hex digest of a binary stream."""
        ...

    def identity_of(self, src: Path | BinaryIO) -> ContentIdentity:
        """Compute the content identity of a file or stream."""
        ...


class HashState(Protocol):
    """Incremental digest, as returned by hashlib constructors."""

    def update(self, data: bytes, /) -> None: ...

    def hexdigest(self) -> str: ...
