"""Metrics adapter that writes to the log."""

import logging


class LoggingMetricsAdapter:
    """Emit metrics as debug log lines under ``udv.metrics``."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("udv.metrics")

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("counter %s +%d%s", name, value, _format_tags(tags))

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("gauge %s=%s%s", name, value, _format_tags(tags))

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("timing %s=%.3fs%s", name, value, _format_tags(tags))


def _format_tags(tags: dict[str, str] | None) -> str:
    if not tags:
        return ""
    return " " + ",".join(f"{key}:{value}" for key, value in sorted(tags.items()))
