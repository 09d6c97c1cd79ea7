"""Adapters for udv ports."""

from .cache_fs import FsCacheAdapter
from .clock_utc import UtcClockAdapter
from .hash_hashlib import HashlibAdapter
from .logger_std import StdLoggerAdapter
from .metrics_logging import LoggingMetricsAdapter
from .metrics_noop import NoopMetricsAdapter

__all__ = [
    "FsCacheAdapter",
    "HashlibAdapter",
    "LoggingMetricsAdapter",
    "NoopMetricsAdapter",
    "StdLoggerAdapter",
    "UtcClockAdapter",
]
