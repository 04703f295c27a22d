"""
Logging for a formgen run.

The assembler reports three phases (``[PHASE 1]`` synthesis, ``[PHASE 2]``
shared modules, ``[PHASE 3]`` writing), one ``[GENERATED]`` line per file,
and ``[WARN]`` lines for duplicate entity names and nested references to
entities that are not generated. Per-entity control/delegate counts and
import inlining are logged at DEBUG.

All loggers live under ``formgen.gen``; ``formgen generate -v / -q`` picks
the level through ``configure_gen_logging``.
"""

import logging
import sys

_LOGGER_NAME = "formgen.gen"


def get_logger(name: str = None) -> logging.Logger:
    """``formgen.api.synthesizer`` -> ``formgen.gen.synthesizer``; None -> ``formgen.gen``."""
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Route ``formgen.gen`` records to stderr as bare messages.

    verbose shows the per-entity DEBUG lines, quiet keeps only ``[WARN]``
    and errors; otherwise phase headers and ``[GENERATED]`` lines are shown.
    Repeated calls re-level the existing handler instead of adding another.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_MessageOnlyFormatter())
    root_logger.addHandler(handler)

    # Keep generator output off the root logger's handlers
    root_logger.propagate = False


class _MessageOnlyFormatter(logging.Formatter):
    """Pipeline messages already carry their ``[TAG]`` prefix."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()
