"""Centralized logging configuration for the ``bachatbox`` package.

Import code logs through ``get_logger(__name__)`` and never attaches handlers;
the CLI decides where output goes by calling ``configure_logging`` once.

Level resolution, first hit wins:

1. the explicit ``level`` argument (the CLI passes ``-v``/``-q`` through
   :func:`level_for_verbosity`);
2. ``BACHATBOX_LOG_LEVEL`` (a level name such as ``DEBUG`` or a number);
3. ``WARNING``, so a plain import run prints only its own summary lines.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "bachatbox"
_LEVEL_ENV = "BACHATBOX_LOG_LEVEL"
_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _parse_level(level: int | str | None) -> int:
    if level is None:
        env_val = os.getenv(_LEVEL_ENV)
        return _parse_level(env_val) if env_val else _DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else _DEFAULT_LEVEL


def level_for_verbosity(verbose: int = 0, quiet: bool = False) -> int | None:
    """Map CLI ``-v`` counts to a level; ``None`` defers to the environment.

    ``-v`` shows the per-import INFO summary, ``-vv`` adds per-row DEBUG
    detail, ``--quiet`` keeps only errors.
    """

    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return None


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the ``bachatbox`` logger.

    Parameters
    ----------
    level:
        Logging level as ``int`` or level name. ``None`` consults
        ``BACHATBOX_LOG_LEVEL``, then falls back to ``WARNING``.
    fmt:
        Optional format string; defaults to
        ``"%(asctime)s %(name)s %(levelname)s %(message)s"``.
    stream:
        Output stream, resolved at call time (``sys.stderr`` when omitted).

    Calling again after the handler is attached does nothing; use
    :func:`reset_logging` first to reconfigure.
    """

    global _handler
    if _handler is not None:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Detach the handler added by :func:`configure_logging`."""

    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name; silent until the package is configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "level_for_verbosity", "reset_logging"]
