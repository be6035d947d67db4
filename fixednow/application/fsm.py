"""Locked/unlocked state guarding installation of a fixed clock.

The flag is plain mutable state with no synchronisation. At most one test may
hold the lock at a time and every lock must be paired with an unlock before
the next one.
"""

from dataclasses import dataclass
from typing import Dict, Optional

UNLOCKED = "UNLOCKED"
LOCKED = "LOCKED"


class ClockStateError(RuntimeError):
    """Raised when lock/unlock calls are not strictly paired."""


class ClockLocked(ClockStateError):
    """A fixed clock was requested while another one is still installed."""


class ClockUnlocked(ClockStateError):
    """An unlock was requested with no fixed clock installed."""


VALID_TRANSITIONS: Dict[str, set[str]] = {
    UNLOCKED: {LOCKED},
    LOCKED: {UNLOCKED},
}

_REJECTIONS = {
    LOCKED: lambda: ClockLocked("Clock is locked"),
    UNLOCKED: lambda: ClockUnlocked("Clock is unlocked"),
}


@dataclass
class ClockLock:
    state: str = UNLOCKED

    @property
    def locked(self) -> bool:
        return self.state == LOCKED

    def validate(self, new_state: str) -> Optional[ClockStateError]:
        """Return the error a transition to ``new_state`` would cause, if any."""
        if new_state not in VALID_TRANSITIONS:
            raise ValueError(f"Unknown clock lock state: {new_state}")
        if new_state in VALID_TRANSITIONS[self.state]:
            return None
        return _REJECTIONS[new_state]()

    def transition(self, new_state: str) -> None:
        error = self.validate(new_state)
        if error is not None:
            raise error
        self.state = new_state


default_clock_lock = ClockLock()
