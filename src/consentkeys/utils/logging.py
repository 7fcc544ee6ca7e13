"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide a helper to obtain namespaced loggers.
    - Allow an optional verbose/debug mode for the command line.

Notes/Edge cases:
    - Configuration is idempotent; repeated calls only adjust the level.
    - Library code never configures handlers itself.  The package root logger
      carries a ``NullHandler`` so that embedding applications stay in control.
    - Secrets, identifiers and digests must never be passed to these loggers.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging"]

ROOT_LOGGER_NAME = "consentkeys"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "consentkeys.stderr"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace.

    ``name`` is usually ``__name__``; names outside the package are nested
    under ``consentkeys`` so that one level setting governs all of them.
    """

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package root logger.

    A handler left by an earlier call is replaced so that output follows the
    current ``sys.stderr``; the root logger never carries more than one.
    """

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError("Unknown logging level")
    root.setLevel(level)
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    return root
