"""Keeps tracked paths in the project's .gitignore."""

import threading
from pathlib import Path

from .errors import UdvIOError

IGNORE_FILENAME = ".gitignore"


class IgnoreSync:
    """Append-only union of tracked paths into a single ignore file.

    Membership is plain substring containment against the whole file, so a
    path that is part of an already listed longer path counts as present.
    Bytes that are not valid UTF-8, in the file or in a path, round-trip
    unchanged through surrogate escapes.
    """

    def __init__(self, ignore_file: Path):
        self.ignore_file = ignore_file
        self._lock = threading.Lock()

    def record(self, logical_path: str) -> bool:
        """Add logical_path unless already present. Returns True if the file changed."""
        with self._lock:
            try:
                content = self.ignore_file.read_text(encoding="utf-8", errors="surrogateescape")
            except FileNotFoundError:
                content = ""
            except OSError as e:
                raise UdvIOError(f"Failed to read {self.ignore_file}: {e}") from e

            if logical_path in content:
                return False

            try:
                with open(self.ignore_file, "a", encoding="utf-8", errors="surrogateescape") as f:
                    f.write(f"\n{logical_path}")
            except OSError as e:
                raise UdvIOError(f"Failed to update {self.ignore_file}: {e}") from e
            return True
