from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from fixednow.domain.models import FixedTimeRequest
from fixednow.domain.timestamps import parse_iso8601z


def test_request_converts_to_utc_epoch_millis():
    request = FixedTimeRequest(year=2017, month=1, day=1, hour=0, minute=0, second=0)
    assert request.epoch_millis() == parse_iso8601z("2017-01-01T00:00:00Z")
    assert request.to_datetime() == datetime(2017, 1, 1, tzinfo=timezone.utc)


def test_second_defaults_to_zero():
    assert FixedTimeRequest(2017, 1, 1, 0, 0) == FixedTimeRequest(2017, 1, 1, 0, 0, 0)
    assert FixedTimeRequest(2017, 1, 1, 0, 0).epoch_millis() == FixedTimeRequest(2017, 1, 1, 0, 0, 0).epoch_millis()


def test_seconds_and_minutes_are_counted():
    base = FixedTimeRequest(2017, 1, 1, 0, 0).epoch_millis()
    assert FixedTimeRequest(2017, 1, 1, 0, 1, 30).epoch_millis() == base + 90_000


@pytest.mark.parametrize(
    "fields",
    [
        (2017, 13, 1, 0, 0),
        (2017, 2, 29, 0, 0),
        (2017, 1, 1, 24, 0),
        (2017, 1, 1, 0, 60),
    ],
)
def test_calendar_errors_propagate(fields):
    with pytest.raises(ValueError):
        FixedTimeRequest(*fields).epoch_millis()


def test_leap_day_accepted():
    assert FixedTimeRequest(2016, 2, 29, 12, 0).epoch_millis() == parse_iso8601z("2016-02-29T12:00:00Z")


def test_from_iso8601z():
    assert FixedTimeRequest.from_iso8601z("2018-06-01T12:30:15Z") == FixedTimeRequest(2018, 6, 1, 12, 30, 15)


def test_request_is_immutable():
    request = FixedTimeRequest(2017, 1, 1, 0, 0)
    with pytest.raises(FrozenInstanceError):
        request.year = 2018
