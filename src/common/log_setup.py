# ABOUTME: Configures console logging for the tracker CLIs using rich.
# ABOUTME: Library modules only create module loggers; handlers are installed here.

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False, console: Console = None) -> None:
    """Route the ``src`` loggers through a RichHandler at INFO (or DEBUG when verbose)."""

    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("src")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
