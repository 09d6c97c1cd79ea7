"""hashlib-backed hashing adapter."""

import hashlib
from pathlib import Path
from typing import BinaryIO

from ..core.errors import UdvIOError
from ..core.models import DEFAULT_ALGORITHM, ContentIdentity, validate_algorithm
from ..ports.hash import HashState

CHUNK_SIZE = 8192


class HashlibAdapter:
    """Streaming digests using hashlib."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        self._algorithm = validate_algorithm(algorithm)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def new(self) -> HashState:
        return hashlib.new(self._algorithm)

    def digest(self, path: Path) -> str:
        try:
            with open(path, "rb") as f:
                return self.digest_stream(f)
        except OSError as e:
            raise UdvIOError(f"Failed to read {path}: {e}") from e

    def digest_stream(self, stream: BinaryIO) -> str:
        h = self.new()
        try:
            for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
                h.update(chunk)
        except OSError as e:
            raise UdvIOError(f"Read failed mid-stream: {e}") from e
        return h.hexdigest()

    def identity_of(self, src: Path | BinaryIO) -> ContentIdentity:
        hexdigest = self.digest(src) if isinstance(src, Path) else self.digest_stream(src)
        return ContentIdentity(self._algorithm, hexdigest)
