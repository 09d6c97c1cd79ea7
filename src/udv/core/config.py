"""Centralized configuration for udv."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models import DEFAULT_ALGORITHM, validate_algorithm
from .walker import CONTROL_DIR

CONFIG_FILENAME = "config"
METRICS_TYPES = ("logging", "noop")


@dataclass(slots=True)
class UdvConfig:
    """All udv configuration in one place.

    Sources, lowest precedence first: defaults, ``.udv/config`` (JSON, an
    empty file means defaults), environment variables, explicit overrides.

    Environment variables (all optional):
        UDV_HASH_ALGORITHM: "sha256" (default) or "md5".
        UDV_LOG_LEVEL:      Logging level. Default "INFO".
        UDV_METRICS:        Metrics backend: "logging" (default) or "noop".
        UDV_WORKERS:        Files processed in parallel by a directory add. Default 1.
    """

    hash_algorithm: str = DEFAULT_ALGORITHM
    log_level: str = "INFO"
    metrics_type: str = "logging"
    workers: int = 1

    def __post_init__(self) -> None:
        self.hash_algorithm = validate_algorithm(self.hash_algorithm)
        if not isinstance(self.log_level, str):
            raise ConfigError(f"log_level must be a string, got {self.log_level!r}")
        self.log_level = self.log_level.upper()
        if self.log_level not in logging.getLevelNamesMapping():
            raise ConfigError(f"Unknown log level {self.log_level!r}")
        if self.metrics_type not in METRICS_TYPES:
            raise ConfigError(
                f"Unknown metrics backend {self.metrics_type!r} (expected one of {METRICS_TYPES})"
            )
        if not isinstance(self.workers, int) or isinstance(self.workers, bool):
            raise ConfigError(f"workers must be an integer, got {self.workers!r}")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")

    @classmethod
    def load(cls, project_root: Path, **overrides: Any) -> UdvConfig:
        """Build config from the project's config file, the environment and overrides."""
        file_values = _file_values(project_root / CONTROL_DIR / CONFIG_FILENAME)
        return cls(**{**file_values, **_env_values(), **_drop_none(overrides)})


def _env_values() -> dict[str, Any]:
    values: dict[str, Any] = {}
    if "UDV_HASH_ALGORITHM" in os.environ:
        values["hash_algorithm"] = os.environ["UDV_HASH_ALGORITHM"]
    if "UDV_LOG_LEVEL" in os.environ:
        values["log_level"] = os.environ["UDV_LOG_LEVEL"]
    if "UDV_METRICS" in os.environ:
        values["metrics_type"] = os.environ["UDV_METRICS"]
    if "UDV_WORKERS" in os.environ:
        values["workers"] = _parse_int("UDV_WORKERS", os.environ["UDV_WORKERS"])
    return values


def _file_values(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}", path=path) from e

    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config: {e}", path=path) from e
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object", path=path)

    known = {f.name for f in fields(UdvConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}", path=path)
    if "workers" in data:
        data["workers"] = _parse_int("workers", data["workers"])
    return data


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
