from dataclasses import dataclass
from datetime import datetime, timezone

from .timestamps import parse_iso8601z, from_epoch_millis, to_epoch_millis


@dataclass(frozen=True)
class FixedTimeRequest:
    """Calendar instant a test wants ``now()`` pinned to, always in UTC."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0

    def to_datetime(self) -> datetime:
        """Return the aware UTC datetime; invalid fields raise ``ValueError``."""
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            0,
            tzinfo=timezone.utc,
        )

    def epoch_millis(self) -> int:
        return to_epoch_millis(self.to_datetime())

    @classmethod
    def from_iso8601z(cls, text: str) -> "FixedTimeRequest":
        instant = from_epoch_millis(parse_iso8601z(text))
        return cls(
            year=instant.year,
            month=instant.month,
            day=instant.day,
            hour=instant.hour,
            minute=instant.minute,
            second=instant.second,
        )
