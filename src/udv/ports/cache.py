"""Cache port interface."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from ..core.models import ContentIdentity


class CachePort(Protocol):
    """Port for content-addressed cache operations."""

    def object_path(self, identity: ContentIdentity) -> Path:
        """Get path where the object for an identity is stored."""
        ...

    def contains(self, identity: ContentIdentity) -> bool:
        """Check if an object for the identity is already cached."""
        ...

    def put(self, identity: ContentIdentity, src: Path | BinaryIO) -> bool:
        """Store content under its identity. Returns False if it was already cached."""
        ...
