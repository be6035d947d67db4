"""pytest integration.

Installing the package registers this module as a pytest plugin. Without an
install, enable it from the root ``conftest.py``::

    pytest_plugins = ["fixednow.adapters.pytest_plugin"]

then pin ``now()`` for a single test with one of::

    @pytest.mark.now(2017, 1, 1, 0, 0)
    @pytest.mark.now(2017, 1, 1, 0, 0, 30)
    @pytest.mark.now("2017-01-01T00:00:00Z")
    @pytest.mark.now()  # 2000-01-01T00:00:00Z

The clock is pinned from the start of setup until the end of teardown, so
fixtures see the same instant as the test body. Tests must run sequentially
in one process (no in-process parallelism).
"""

from contextlib import ExitStack
from dataclasses import astuple
from typing import Optional

import pytest

from ..application.guard import FixedTimeGuard
from ..application.time_source import TimeSource
from ..config import DEFAULT_NOW_INI, LOG_LEVEL_INI, build_components, load_settings
from ..domain.models import FixedTimeRequest
from ..domain.timestamps import DEFAULT_NOW, InvalidTimestamp
from ..infrastructure.logging import configure_logging

MARKER = "now"

guard_key = pytest.StashKey[FixedTimeGuard]()
pinned_key = pytest.StashKey[ExitStack]()


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        DEFAULT_NOW_INI,
        "ISO-8601 UTC instant that tests without a now marker are pinned to",
        default="",
    )
    parser.addini(LOG_LEVEL_INI, "level for fixednow structlog output", default="")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        f"{MARKER}(year, month, day, hour, minute, second=0): pin now() to a UTC instant "
        "for this test; also accepts a single 'YYYY-MM-DDTHH:MM:SSZ' string",
    )
    settings = load_settings(config)
    if settings.log_level is not None:
        configure_logging(settings.log_level)
    try:
        components = build_components(settings)
    except InvalidTimestamp as exc:
        raise pytest.UsageError(f"{DEFAULT_NOW_INI}: {exc}") from exc
    config.stash[guard_key] = components["guard"]


def request_from_marker(marker: pytest.Mark) -> FixedTimeRequest:
    """Translate a ``now`` marker into the request the guard consumes."""
    args, kwargs = marker.args, marker.kwargs
    if not args and not kwargs:
        return FixedTimeRequest.from_iso8601z(DEFAULT_NOW)

    if len(args) == 1 and isinstance(args[0], str) and not kwargs:
        try:
            return FixedTimeRequest.from_iso8601z(args[0])
        except InvalidTimestamp as exc:
            raise pytest.UsageError(f"@pytest.mark.{MARKER}: {exc}") from exc

    try:
        request = FixedTimeRequest(*args, **kwargs)
    except TypeError as exc:
        raise pytest.UsageError(f"@pytest.mark.{MARKER}: {exc}") from exc
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in astuple(request)):
        raise pytest.UsageError(f"@pytest.mark.{MARKER}: fields must be integers, got {request}")
    return request


@pytest.hookimpl(wrapper=True)
def pytest_runtest_setup(item: pytest.Item):
    marker = item.get_closest_marker(MARKER)
    request = request_from_marker(marker) if marker is not None else None
    pinned = ExitStack()
    pinned.enter_context(item.config.stash[guard_key].fixed(request))
    item.stash[pinned_key] = pinned
    return (yield)


@pytest.hookimpl(wrapper=True)
def pytest_runtest_teardown(item: pytest.Item, nextitem: Optional[pytest.Item]):
    try:
        return (yield)
    finally:
        # released after fixture finalizers, also when setup or the test failed
        pinned = item.stash.get(pinned_key, None)
        if pinned is not None:
            del item.stash[pinned_key]
            pinned.close()


@pytest.fixture
def fixed_time_guard(pytestconfig: pytest.Config) -> FixedTimeGuard:
    return pytestconfig.stash[guard_key]


@pytest.fixture
def time_source(fixed_time_guard: FixedTimeGuard) -> TimeSource:
    return fixed_time_guard.time_source
