"""Logging setup for the command-line entry point.

Library modules only create module loggers under the ``chat_reflow``
namespace. The CLI calls setup_logging() once to attach a Rich handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "chat_reflow"


def setup_logging(level: str | int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Configure the ``chat_reflow`` logger and return it.

    Accepts a level name ("debug") or a numeric level ("10"). Unknown names
    fall back to WARNING. Calling this again replaces the handler rather
    than stacking a second one.
    """
    if isinstance(level, str):
        level = level.strip()
        if level.isdigit():
            level = int(level)
        else:
            resolved = logging.getLevelName(level.upper())
            level = resolved if isinstance(resolved, int) else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logging initialized at %s", logging.getLevelName(level))
    return logger
