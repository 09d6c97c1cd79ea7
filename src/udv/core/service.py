"""Core TrackingService orchestration."""

import concurrent.futures
from collections.abc import Iterable
from pathlib import Path

from ..ports import CachePort, ClockPort, HashPort, LoggerPort, MetricsPort
from .errors import (
    ExcludedPathError,
    NotFoundError,
    OutsideProjectError,
    UdvError,
    UdvIOError,
    UnsupportedFileTypeError,
)
from .ignore import IgnoreSync
from .manifest import ManifestWriter
from .models import AddSummary, FileFailure, FileResult, Stage, TrackedArtifact
from .walker import CONTROL_DIR, TreeWalker


class TrackingService:
    """Tracks files by content: cache the bytes, write a sidecar, ignore the path."""

    def __init__(
        self,
        project_root: Path,
        hasher: HashPort,
        cache: CachePort,
        manifests: ManifestWriter,
        ignore: IgnoreSync,
        walker: TreeWalker,
        clock: ClockPort,
        logger: LoggerPort,
        metrics: MetricsPort,
        workers: int = 1,
    ):
        self.project_root = project_root.resolve()
        self.hasher = hasher
        self.cache = cache
        self.manifests = manifests
        self.ignore = ignore
        self.walker = walker
        self.clock = clock
        self.logger = logger
        self.metrics = metrics
        self.workers = max(1, workers)

    def add(self, target: Path) -> AddSummary:
        """Track a file, or every file beneath a directory.

        A failing single-file add raises the stage's error. A directory add
        keeps going past failing files and reports them in the summary's
        ``failures``; files that succeeded stay cached and manifested.
        """
        start_time = self.clock.now()

        # Validating
        path = self._resolve(target)
        logical = self.logical_path(path)
        is_directory = path.is_dir() and not path.is_symlink()

        self.logger.info("Starting add operation", path=logical, directory=is_directory)

        # Expanding
        files = self.walker.iter_files(path)
        summary = AddSummary(target=logical, is_directory=is_directory)

        if not is_directory:
            for file_path in files:
                summary.added.append(self._add_file(file_path))
        else:
            try:
                outcomes = list(self._run_pipeline(files))
            except UdvError as e:
                raise e.with_context(logical, Stage.EXPANDING)
            for outcome in outcomes:
                if isinstance(outcome, FileResult):
                    summary.added.append(outcome)
                else:
                    summary.failures.append(outcome)
                    self.logger.warning(
                        "Skipping file",
                        path=outcome.path,
                        stage=outcome.stage.value,
                        error=outcome.error.message,
                    )

        summary.duration = (self.clock.now() - start_time).total_seconds()
        self.logger.log_operation(
            op="add",
            path=logical,
            sizes={"file": sum(result.size_bytes for result in summary.added)},
            durations={"total": summary.duration},
            cache_hit=bool(summary.added) and summary.cache_hits == len(summary.added),
        )
        self.metrics.timing("udv.add.duration", summary.duration)
        self.metrics.gauge("udv.add.files", len(summary.added))
        if summary.failures:
            self.metrics.increment("udv.add.failed", len(summary.failures))

        return summary

    def logical_path(self, path: Path) -> str:
        """Path relative to the project root, POSIX separators."""
        return path.relative_to(self.project_root).as_posix()

    def _resolve(self, target: Path) -> Path:
        candidate = target if target.is_absolute() else self.project_root / target
        if not candidate.exists() and not candidate.is_symlink():
            raise NotFoundError(f"The specified path does not exist: {target}", path=target)

        # Resolve the parent only so a symlinked target is still seen as a link
        if candidate.name == "..":
            path = candidate.resolve()
        else:
            path = candidate.parent.resolve() / candidate.name
        try:
            relative = path.relative_to(self.project_root)
        except ValueError as e:
            raise OutsideProjectError(
                f"Path is outside the project root {self.project_root}", path=target
            ) from e
        if CONTROL_DIR in relative.parts:
            raise ExcludedPathError(
                f"Path is inside the {CONTROL_DIR} control directory", path=target
            )
        return path

    def _run_pipeline(self, files: Iterable[Path]) -> Iterable[FileResult | FileFailure]:
        if self.workers == 1:
            for path in files:
                yield self._try_add_file(path)
            return

        # Bounded pool; results are yielded in walk order
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(self._try_add_file, path) for path in files]
            for future in futures:
                yield future.result()

    def _try_add_file(self, path: Path) -> FileResult | FileFailure:
        try:
            return self._add_file(path)
        except UdvError as e:
            stage = e.stage if isinstance(e.stage, Stage) else Stage.VALIDATING
            return FileFailure(path=self.logical_path(path), stage=stage, error=e)

    def _add_file(self, path: Path) -> FileResult:
        """Hash, store, write the manifest and record the ignore entry for one file."""
        logical = self.logical_path(path)
        stage = Stage.VALIDATING
        try:
            if path.is_symlink() or not path.is_file():
                raise UnsupportedFileTypeError(
                    "Only regular files can be tracked (symlinks are not followed)"
                )

            stage = Stage.HASHING
            identity = self.hasher.identity_of(path)
            size_bytes = path.stat().st_size

            stage = Stage.STORING
            stored = self.cache.put(identity, path)
            if stored:
                self.logger.debug("Cached object", path=logical, hash=identity.hexdigest)
                self.metrics.increment("udv.cache.stored")
            else:
                self.logger.debug("Object already cached", path=logical, hash=identity.hexdigest)
                self.metrics.increment("udv.cache.hit")

            stage = Stage.MANIFEST_WRITING
            artifact = TrackedArtifact.from_identity(identity, logical, size_bytes)
            sidecar = self.manifests.write(path, artifact)

            stage = Stage.IGNORE_RECORDING
            ignore_added = self.ignore.record(logical)
        except UdvError as e:
            raise e.with_context(logical, stage)
        except (OSError, UnicodeError) as e:
            raise UdvIOError(str(e), path=logical, stage=stage) from e

        self.logger.info(
            "Added file",
            path=logical,
            hash=identity.hexdigest,
            size=size_bytes,
            sidecar=sidecar.name,
            cache_hit=not stored,
        )
        return FileResult(
            path=logical,
            identity=identity,
            size_bytes=size_bytes,
            cache_hit=not stored,
            ignore_added=ignore_added,
        )
