import logging

import structlog
from structlog.stdlib import BoundLogger

ROOT_LOGGER = "fixednow"


def get_logger(name: str) -> BoundLogger:
    """Return a structlog bound logger that emits through the stdlib logger ``name``.

    Nothing is printed until the stdlib logger (or ``configure_logging``) enables it.
    """

    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=BoundLogger)


def configure_logging(level: str) -> None:
    """Show fixednow events at ``level`` (a stdlib level name such as ``"DEBUG"``) and above."""

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
