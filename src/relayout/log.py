"""Debug logging on loguru, disabled unless the CLI asks for it."""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >18}</yellow>::"
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

_handler_id: int | None = None


def configure_logging(verbose: bool) -> None:
    """Send relayout's debug records to stderr when verbose, else silence them.

    Called by the CLI, which owns the process: verbose mode replaces any
    existing loguru handlers.
    """
    global _handler_id
    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
    if not verbose:
        logger.disable("relayout")
        return
    logger.remove()
    _handler_id = logger.add(sys.stderr, format=_FORMAT, level="DEBUG")
    logger.enable("relayout")
