from datetime import tzinfo
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant in epoch milliseconds."""

    @property
    def zone(self) -> tzinfo:
        ...

    def now(self) -> int:
        ...
