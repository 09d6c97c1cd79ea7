"""Filesystem content-addressed cache adapter."""

import os
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO

from ..core.errors import IntegrityMismatchError, StoreWriteError
from ..core.models import ContentIdentity
from ..ports.hash import HashPort

CHUNK_SIZE = 8192
READ_ONLY = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH


class FsCacheAdapter:
    """Append-only blob store sharded by the first two hex digits of the digest.

    Layout::

        <base_dir>/<first-2-hex>/<remaining-hex>

    Objects are written to a temporary file in their shard and renamed into
    place, so the canonical path only ever holds complete content. Objects
    are never modified once written.
    """

    def __init__(self, base_dir: Path, hasher: HashPort):
        self.base_dir = base_dir
        self.hasher = hasher

    def object_path(self, identity: ContentIdentity) -> Path:
        return self.base_dir / identity.shard / identity.remainder

    def contains(self, identity: ContentIdentity) -> bool:
        return self.object_path(identity).is_file()

    def put(self, identity: ContentIdentity, src: Path | BinaryIO) -> bool:
        if identity.algorithm != self.hasher.algorithm:
            raise StoreWriteError(
                f"Cache hasher uses {self.hasher.algorithm}, cannot store {identity.algorithm} object"
            )
        if self.contains(identity):
            return False

        dest = self.object_path(identity)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=dest.parent, prefix=".tmp-")
        except OSError as e:
            raise StoreWriteError(f"Failed to prepare cache shard {dest.parent}: {e}") from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as out:
                if isinstance(src, Path):
                    with open(src, "rb") as f:
                        actual = self._copy(f, out)
                else:
                    actual = self._copy(src, out)
                out.flush()
                os.fsync(out.fileno())

            if actual != identity.hexdigest:
                raise IntegrityMismatchError(
                    f"Content changed while caching: expected {identity.hexdigest}, got {actual}"
                )

            os.chmod(tmp_path, READ_ONLY)
            os.replace(tmp_path, dest)
        except IntegrityMismatchError:
            tmp_path.unlink(missing_ok=True)
            raise
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(f"Failed to write cache object {dest}: {e}") from e

        return True

    def _copy(self, src: BinaryIO, out: BinaryIO) -> str:
        """Copy src to out, returning the digest of the copied bytes."""
        h = self.hasher.new()
        for chunk in iter(lambda: src.read(CHUNK_SIZE), b""):
            h.update(chunk)
            out.write(chunk)
        return h.hexdigest()
