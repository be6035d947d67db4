"""Bracket a test body with a fixed clock on a :class:`TimeSource`."""

from contextlib import contextmanager
from datetime import timezone
from typing import Callable, Iterator, Optional

from ..domain.models import FixedTimeRequest
from ..domain.timestamps import to_iso8601z
from ..infrastructure.clock import FixedClock
from ..infrastructure.logging import get_logger
from .fsm import LOCKED, UNLOCKED, ClockLock
from .time_source import TimeSource

logger = get_logger(__name__)


class FixedTimeGuard:
    """Pins ``time_source.now()`` for tests that ask for a fixed instant.

    Tests without a request run untouched unless the guard was built with a
    ``default`` request, in which case they are pinned to that instead.
    Activation and deactivation are strictly paired through ``clock_lock``;
    the guard is single-threaded and must not be shared by overlapping runs.
    """

    def __init__(
        self,
        time_source: TimeSource,
        clock_lock: ClockLock,
        default: Optional[FixedTimeRequest] = None,
    ) -> None:
        self.time_source = time_source
        self.clock_lock = clock_lock
        self.default = default

    def run(self, body: Callable[[], None], request: Optional[FixedTimeRequest] = None) -> None:
        with self.fixed(request):
            body()

    @contextmanager
    def fixed(self, request: Optional[FixedTimeRequest] = None) -> Iterator[TimeSource]:
        request = request if request is not None else self.default
        if request is None:
            yield self.time_source
            return

        epoch_millis = request.epoch_millis()
        # outside the try: a rejected activation must not release the holder's lock
        self.activate(epoch_millis)
        try:
            yield self.time_source
        finally:
            self.deactivate()

    def activate(self, epoch_millis: int) -> None:
        error = self.clock_lock.validate(LOCKED)
        if error is not None:
            raise error
        self.clock_lock.transition(LOCKED)
        self.time_source.fixed_current_time(FixedClock(epoch_millis, timezone.utc))
        logger.debug("clock_fixed", epoch_millis=epoch_millis, now=to_iso8601z(epoch_millis))

    def deactivate(self) -> None:
        error = self.clock_lock.validate(UNLOCKED)
        if error is not None:
            raise error
        self.time_source.tick_current_time()
        self.clock_lock.transition(UNLOCKED)
        logger.debug("clock_ticking")
