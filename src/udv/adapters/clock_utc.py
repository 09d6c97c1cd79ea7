"""UTC clock adapter."""

from datetime import UTC, datetime


class UtcClockAdapter:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)
