"""Core domain for udv."""

from .config import UdvConfig
from .errors import (
    AddFailedError,
    ConfigError,
    ExcludedPathError,
    IntegrityMismatchError,
    ManifestWriteError,
    NotFoundError,
    OutsideProjectError,
    ProjectError,
    StoreWriteError,
    UdvError,
    UdvIOError,
    UnsupportedFileTypeError,
)
from .ignore import IgnoreSync
from .manifest import ManifestWriter
from .models import (
    AddSummary,
    ContentIdentity,
    FileFailure,
    FileResult,
    Stage,
    TrackedArtifact,
)
from .project import find_project_root, init_project
from .service import TrackingService
from .walker import CONTROL_DIR, TreeWalker

__all__ = [
    "AddFailedError",
    "AddSummary",
    "CONTROL_DIR",
    "ConfigError",
    "ContentIdentity",
    "ExcludedPathError",
    "FileFailure",
    "FileResult",
    "IgnoreSync",
    "IntegrityMismatchError",
    "ManifestWriteError",
    "ManifestWriter",
    "NotFoundError",
    "OutsideProjectError",
    "ProjectError",
    "Stage",
    "StoreWriteError",
    "TrackedArtifact",
    "TrackingService",
    "TreeWalker",
    "UdvConfig",
    "UdvError",
    "UdvIOError",
    "UnsupportedFileTypeError",
    "find_project_root",
    "init_project",
]
