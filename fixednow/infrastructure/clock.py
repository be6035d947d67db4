import time
from datetime import timezone, tzinfo


class SystemClock:
    """Ticking UTC clock backed by time.time_ns()."""

    zone: tzinfo = timezone.utc

    def now(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """Clock override that always reports the same instant."""

    def __init__(self, epoch_millis: int, zone: tzinfo = timezone.utc) -> None:
        self.epoch_millis = epoch_millis
        self.zone = zone

    def now(self) -> int:
        return self.epoch_millis

    def __repr__(self) -> str:
        return f"FixedClock(epoch_millis={self.epoch_millis}, zone={self.zone})"
