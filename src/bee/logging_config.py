"""Logging configuration for bee.

Developer diagnostics only; user-facing status goes through the
message buffer.  Every module logs via ``logging.getLogger(__name__)``
and this module attaches a single Rich handler to the ``bee`` logger.

Usage:
    from bee.logging_config import configure_logging

    configure_logging(debug=True)
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "bee"


def configure_logging(debug: bool = False, *, console: Console | None = None) -> logging.Logger:
    """Configure the ``bee`` logger and return it.

    Safe to call more than once; previous handlers installed here are
    replaced rather than stacked.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    for handler in list(logger.handlers):
        if getattr(handler, "_bee_handler", False):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler._bee_handler = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
