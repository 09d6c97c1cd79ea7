"""Directory expansion for the add pipeline."""

from collections.abc import Iterator
from pathlib import Path

from .errors import NotFoundError, UdvIOError

CONTROL_DIR = ".udv"


class TreeWalker:
    """Enumerates the files an add should track.

    Directories named like the control directory are pruned at any depth.
    Symlinks are never followed; they are yielded like files so the caller
    can reject them.
    """

    def __init__(self, control_dir: str = CONTROL_DIR):
        self.control_dir = control_dir

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Return a lazy iterator over root's files, in lexicographic order.

        Raises NotFoundError immediately when root does not exist.
        """
        if not root.exists() and not root.is_symlink():
            raise NotFoundError(f"Path does not exist: {root}", path=root)
        if root.is_dir() and not root.is_symlink():
            return self._walk(root)
        return iter([root])

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            raise UdvIOError(f"Failed to list {directory}: {e}", path=directory) from e
        for entry in entries:
            if entry.is_symlink():
                yield entry
            elif entry.is_dir():
                if entry.name == self.control_dir:
                    continue
                yield from self._walk(entry)
            else:
                yield entry
