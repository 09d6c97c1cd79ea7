"""Core exceptions for udv."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import AddSummary


class UdvError(Exception):
    """Base exception for udv errors.

    ``path`` and ``stage`` are filled in by the tracking service so a
    failure can be attributed to a file and a pipeline step.
    """

    def __init__(self, message: str, *, path: str | Path | None = None, stage: Any = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.stage = stage

    def with_context(self, path: str | Path, stage: Any) -> UdvError:
        """Attach file/stage context without overwriting existing context."""
        if self.path is None:
            self.path = path
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        parts = []
        if self.stage is not None:
            parts.append(f"[{getattr(self.stage, 'value', self.stage)}]")
        if self.path is not None:
            parts.append(f"{self.path}:")
        parts.append(self.message)
        return " ".join(parts)


class NotFoundError(UdvError):
    """Path does not exist."""


class UdvIOError(UdvError):
    """Read, write or copy failure."""


class StoreWriteError(UdvError):
    """Content could not be written to the cache."""


class IntegrityMismatchError(StoreWriteError):
    """Stored bytes do not hash to the expected identity."""


class ManifestWriteError(UdvError):
    """Sidecar manifest could not be written."""


class UnsupportedFileTypeError(UdvError):
    """Symlinks and other non-regular files cannot be tracked."""


class OutsideProjectError(UdvError):
    """Target path is not beneath the project root."""


class ExcludedPathError(UdvError):
    """Target path lies inside the control directory."""


class ProjectError(UdvError):
    """Project bootstrap precondition failed."""


class ConfigError(UdvError):
    """Invalid configuration."""


class AddFailedError(UdvError):
    """One or more files of a directory add failed."""

    def __init__(self, summary: AddSummary):
        lines = [f"{len(summary.failures)} of {summary.total} file(s) failed:"]
        lines.extend(f"  {failure.path} ({failure.stage.value}): {failure.error.message}"
                     for failure in summary.failures)
        super().__init__("\n".join(lines), path=summary.target)
        self.summary = summary
