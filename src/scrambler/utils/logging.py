"""Logging utilities.

All loggers live under the ``scrambler`` namespace.  The package never
configures the root logger; :func:`configure_logging` attaches a single stderr
handler to the package logger and is safe to call repeatedly.
"""

from __future__ import annotations

import logging
import sys

_ROOT_NAME = "scrambler"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace for ``name``."""

    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this more than once only adjusts the level.  A handler left bound
    to a stream that is closed or no longer ``sys.stderr`` is replaced.
    """

    logger = logging.getLogger(_ROOT_NAME)
    level = logging.DEBUG if verbose else logging.WARNING
    logger.setLevel(level)
    current: logging.Handler | None = None
    for handler in list(logger.handlers):
        if not getattr(handler, "_scrambler", False):
            continue
        stream = getattr(handler, "stream", None)
        if current is None and stream is sys.stderr and not getattr(stream, "closed", False):
            current = handler
        else:
            logger.removeHandler(handler)
    if current is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._scrambler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = False
    return logger


__all__ = ["get_logger", "configure_logging"]
