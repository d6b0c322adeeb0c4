"""
Logging Configuration

Library modules only create loggers; handlers are installed here, by the
command line entry point.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_FORMAT = "%(message)s"
DEFAULT_DATE_FORMAT = "[%X]"

_initialized = False


def setup_logging(level: int = logging.INFO, console: Optional[Console] = None) -> None:
    """
    Configure logging for the uilens package.

    Args:
        level: Logging level (default: INFO)
        console: Rich console to write to (default: stderr)
    """
    global _initialized

    root_logger = logging.getLogger("uilens")
    root_logger.setLevel(level)

    if _initialized:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _initialized = True
