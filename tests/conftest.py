"""
Pytest configuration and fixtures for udv tests.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Callable

import pytest

from udv.adapters import FsCacheAdapter, HashlibAdapter, StdLoggerAdapter
from udv.core import CONTROL_DIR, IgnoreSync, ManifestWriter, TrackingService, TreeWalker, init_project


class FixedStepClock:
    """Clock that advances one second per call."""

    def __init__(self) -> None:
        self.current = datetime(2024, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class RecordingMetrics:
    """Metrics adapter that remembers every emission."""

    def __init__(self) -> None:
        self.counters: dict[str, int] = {}
        self.gauges: dict[str, float] = {}
        self.timings: dict[str, float] = {}

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges[name] = value

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.timings[name] = value


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A git working tree with an initialized udv control directory."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / ".git").mkdir()
    init_project(root)
    return root


@pytest.fixture
def cache_dir(project_root: Path) -> Path:
    return project_root / CONTROL_DIR / "cache"


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def make_service(project_root: Path, metrics: RecordingMetrics) -> Callable[..., TrackingService]:
    """Factory for a TrackingService wired against project_root."""

    def _make(algorithm: str = "sha256", workers: int = 1, **overrides: Any) -> TrackingService:
        hasher = HashlibAdapter(algorithm)
        components: dict[str, Any] = {
            "project_root": project_root,
            "hasher": hasher,
            "cache": FsCacheAdapter(project_root / CONTROL_DIR / "cache", hasher),
            "manifests": ManifestWriter(),
            "ignore": IgnoreSync(project_root / ".gitignore"),
            "walker": TreeWalker(),
            "clock": FixedStepClock(),
            "logger": StdLoggerAdapter(name="udv.tests", level="DEBUG"),
            "metrics": metrics,
            "workers": workers,
        }
        components.update(overrides)
        return TrackingService(**components)

    return _make


@pytest.fixture
def service(make_service: Callable[..., TrackingService]) -> TrackingService:
    return make_service()


@pytest.fixture
def write_file(project_root: Path) -> Callable[[str, str | bytes], Path]:
    """Write a file below project_root, creating parent directories."""

    def _write(relative: str, content: str | bytes) -> Path:
        path = project_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_bytes(content.encode("utf-8"))
        else:
            path.write_bytes(content)
        return path

    return _write


@pytest.fixture
def cache_objects(cache_dir: Path) -> Callable[[], list[Path]]:
    """Lists every object currently in the cache."""

    def _list() -> list[Path]:
        if not cache_dir.exists():
            return []
        return sorted(p for p in cache_dir.rglob("*") if p.is_file())

    return _list
