"""Standard library logging adapter."""

import logging
from typing import Any


class StdLoggerAdapter:
    """Structured logging on top of the stdlib ``logging`` module.

    Keyword fields are rendered as ``key=value`` pairs after the message.
    """

    def __init__(self, name: str = "udv", level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.upper())

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def log_operation(
        self,
        op: str,
        path: str,
        sizes: dict[str, int],
        durations: dict[str, float],
        cache_hit: bool = False,
    ) -> None:
        self.info(
            f"Operation {op} complete",
            op=op,
            path=path,
            sizes=sizes,
            durations={name: round(value, 3) for name, value in durations.items()},
            cache_hit=cache_hit,
        )

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            rendered = " ".join(f"{key}={value}" for key, value in fields.items())
            message = f"{message} {rendered}"
        self.logger.log(level, message)

