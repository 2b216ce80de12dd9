"""Clock implementations for time-dependent settlement logic"""

from datetime import datetime, timezone


class SystemClock:
    """Default clock backed by the real system time"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to a single instant, for replays and tests"""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
