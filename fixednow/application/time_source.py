"""Process-wide "current time" accessor whose clock can be swapped in tests."""

from datetime import timedelta
from typing import Optional

from ..domain import timestamps
from ..infrastructure.clock import FixedClock, SystemClock
from ..ports.clock import Clock


class TimeSource:
    """Holds the active clock that ``now()`` reads.

    Not thread-safe: swapping the clock while another thread reads it, or
    sharing one instance between parallel test runners, is unsupported.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock if clock is not None else SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def is_fixed(self) -> bool:
        return isinstance(self._clock, FixedClock)

    def now(self) -> int:
        """Return the current instant in epoch milliseconds."""
        return self._clock.now()

    def fixed_current_time(self, clock: Clock) -> None:
        self._clock = clock

    def tick_current_time(self) -> None:
        self._clock = SystemClock()

    def before_days(self, days: int) -> int:
        return self._shift(timedelta(days=-days))

    def after_days(self, days: int) -> int:
        return self._shift(timedelta(days=days))

    def _shift(self, delta: timedelta) -> int:
        instant = timestamps.from_epoch_millis(self.now()).astimezone(self._clock.zone)
        return timestamps.to_epoch_millis(instant + delta)

    @staticmethod
    def parse_iso8601z(text: str) -> int:
        return timestamps.parse_iso8601z(text)

    @staticmethod
    def to_iso8601z(epoch_millis: int) -> str:
        return timestamps.to_iso8601z(epoch_millis)


default_time_source = TimeSource()
