"""Logging helpers for bpm_boogaloo."""

import logging

logger = logging.getLogger("bpm_boogaloo")
logger.addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger for `name`, or the package logger when no name is given."""
    if name:
        return logging.getLogger(name)
    return logger


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Attach a stream handler to the package logger.

    Applications call this once at startup; library code only asks for loggers.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s][%(name)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
