"""Logging for prazo, with verbosity levels tuned to layout diagnostics."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Between INFO and WARNING: summaries of what a render pass produced
SUMMARY_LEVEL = 25
# Between DEBUG and INFO: per-project placement decisions
PLACEMENT_LEVEL = 15

logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
logging.addLevelName(PLACEMENT_LEVEL, "PLACEMENT")

VERBOSITY_SILENT = 0
VERBOSITY_SUMMARY = 1
VERBOSITY_PLACEMENT = 2
VERBOSITY_DEBUG = 3

_LEVELS_BY_VERBOSITY = {
    VERBOSITY_SILENT: logging.ERROR,
    VERBOSITY_SUMMARY: SUMMARY_LEVEL,
    VERBOSITY_PLACEMENT: PLACEMENT_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class PrazoLogger(logging.Logger):
    """Logger with semantic methods for each verbosity level.

    - summary(): level 1, one line per render pass (row counts, window)
    - placement(): level 2, why a project was placed, clamped or dropped
    - debug(): level 3, raw intermediate values
    """

    def summary(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a render summary (verbosity level 1)."""
        if self.isEnabledFor(SUMMARY_LEVEL):
            self._log(SUMMARY_LEVEL, msg, args, **kwargs)

    def placement(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a placement decision (verbosity level 2)."""
        if self.isEnabledFor(PLACEMENT_LEVEL):
            self._log(PLACEMENT_LEVEL, msg, args, **kwargs)


def get_logger() -> PrazoLogger:
    """Return the shared prazo logger.

    Call setup_logger() first to attach a handler; until then only errors
    propagate through the root logger.
    """
    logging.setLoggerClass(PrazoLogger)
    logger = logging.getLogger("prazo")
    assert isinstance(logger, PrazoLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the prazo logger for a verbosity level.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbosity: 0=silent (errors only), 1=summary, 2=placement, 3=debug
        stream: Output stream, defaults to sys.stderr
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVELS_BY_VERBOSITY.get(verbosity, logging.ERROR))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and return to errors-only, for test isolation."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def placement_enabled() -> bool:
    """Whether per-project placement messages will be emitted."""
    return get_logger().isEnabledFor(PLACEMENT_LEVEL)


def debug_enabled() -> bool:
    """Whether debug messages will be emitted."""
    return get_logger().isEnabledFor(logging.DEBUG)
