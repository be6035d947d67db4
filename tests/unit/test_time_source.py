import time

from fixednow.application.time_source import TimeSource
from fixednow.infrastructure.clock import FixedClock, SystemClock


def _real_millis() -> int:
    return time.time_ns() // 1_000_000


def test_ticks_with_system_clock_by_default():
    source = TimeSource()
    before = _real_millis()
    now = source.now()
    after = _real_millis()
    assert before <= now <= after
    assert isinstance(source.clock, SystemClock)
    assert not source.is_fixed


def test_fixed_current_time_and_tick_current_time():
    source = TimeSource()
    pinned = TimeSource.parse_iso8601z("2017-01-01T00:00:00Z")
    source.fixed_current_time(FixedClock(pinned))
    assert source.is_fixed
    assert source.now() == pinned
    assert source.now() == pinned

    source.tick_current_time()
    assert not source.is_fixed
    assert source.now() != pinned


def test_day_arithmetic_relative_to_now():
    source = TimeSource(FixedClock(TimeSource.parse_iso8601z("2000-01-02T00:00:00Z")))
    assert source.after_days(13) == TimeSource.parse_iso8601z("2000-01-15T00:00:00Z")
    assert source.before_days(2) == TimeSource.parse_iso8601z("1999-12-31T00:00:00Z")


def test_day_arithmetic_crosses_leap_day():
    source = TimeSource(FixedClock(TimeSource.parse_iso8601z("2016-02-28T06:00:00Z")))
    assert source.to_iso8601z(source.after_days(1)) == "2016-02-29T06:00:00Z"
    assert source.to_iso8601z(source.after_days(2)) == "2016-03-01T06:00:00Z"
