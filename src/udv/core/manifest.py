"""Sidecar manifest writer."""

import json
import os
import tempfile
from pathlib import Path

from .errors import ManifestWriteError
from .models import TrackedArtifact

SIDECAR_SUFFIX = ".dvc"


class ManifestWriter:
    """Writes ``<file>.dvc`` sidecars next to tracked files.

    A sidecar is overwritten each time its file is tracked; git versions the
    sidecar itself.
    """

    def __init__(self, suffix: str = SIDECAR_SUFFIX):
        self.suffix = suffix
        # Sidecars get the same mode a plain open() would give them
        umask = os.umask(0)
        os.umask(umask)
        self.file_mode = 0o666 & ~umask

    def sidecar_path(self, path: Path) -> Path:
        """Append the suffix to the full filename (``data.csv`` -> ``data.csv.dvc``)."""
        return path.with_name(path.name + self.suffix)

    def write(self, path: Path, artifact: TrackedArtifact) -> Path:
        sidecar = self.sidecar_path(path)
        content = json.dumps(artifact.to_dict(), indent=2) + "\n"

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=sidecar.parent, prefix=f".{sidecar.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(tmp_name, self.file_mode)
            os.replace(tmp_name, sidecar)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise ManifestWriteError(f"Failed to write manifest {sidecar}: {e}") from e

        return sidecar
