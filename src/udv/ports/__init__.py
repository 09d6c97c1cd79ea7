"""Port interfaces for udv."""

from .cache import CachePort
from .clock import ClockPort
from .hash import HashPort, HashState
from .logger import LoggerPort
from .metrics import MetricsPort

__all__ = [
    "CachePort",
    "ClockPort",
    "HashPort",
    "HashState",
    "LoggerPort",
    "MetricsPort",
]
