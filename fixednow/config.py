from dataclasses import dataclass
from typing import Any, Optional

from .application.fsm import ClockLock, default_clock_lock
from .application.guard import FixedTimeGuard
from .application.time_source import TimeSource, default_time_source
from .domain.models import FixedTimeRequest

DEFAULT_NOW_INI = "fixednow_default"
LOG_LEVEL_INI = "fixednow_log_level"


@dataclass
class Settings:
    default_now: Optional[str] = None
    log_level: Optional[str] = None


def load_settings(config: Any) -> Settings:
    """Read plugin settings from the pytest ini options."""

    return Settings(
        default_now=_ini_value(config, DEFAULT_NOW_INI),
        log_level=_ini_value(config, LOG_LEVEL_INI),
    )


def _ini_value(config: Any, name: str) -> Optional[str]:
    value = str(config.getini(name) or "").strip()
    return value or None


def build_components(
    settings: Settings,
    time_source: TimeSource = default_time_source,
    clock_lock: ClockLock = default_clock_lock,
) -> dict:
    """Construct the guard and its collaborators for the pytest plugin."""

    default = (
        FixedTimeRequest.from_iso8601z(settings.default_now)
        if settings.default_now is not None
        else None
    )
    guard = FixedTimeGuard(time_source=time_source, clock_lock=clock_lock, default=default)
    return {
        "time_source": time_source,
        "clock_lock": clock_lock,
        "guard": guard,
    }
