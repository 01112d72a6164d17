"""
Drapeau logging bootstrap.

Every drapeau module logs through logging.getLogger(__name__), under the
"drapeau" logger, which carries a NullHandler so an embedding program sees
nothing unless it opts in. configure_logging() is that opt-in: it attaches a
rich handler to the "drapeau" logger only, never to the root logger.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "drapeau"


def configure_logging(level=logging.INFO, /, *, console=None):
    """
    route drapeau records to a rich console (stderr by default).

    calling it again only updates the level and the console; handlers are not
    stacked.

    returns the configured "drapeau" logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


__all__ = (
    "LOGGER_NAME",
    "configure_logging",
)
