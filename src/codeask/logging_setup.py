"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this module decides
where those records go.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def level_from_string(level: str | None) -> int:
    """Convert a level name to a logging level. Returns WARNING if unknown."""
    if not level:
        return logging.WARNING
    return _LEVELS.get(level.lower(), logging.WARNING)


def configure_logging(level: str | None = None, console: Console | None = None) -> None:
    """Route codeask log records to stderr through rich.

    Args:
        level: Level name (debug, info, warning, error)
        console: Console to render on (defaults to a stderr console)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("codeask")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level_from_string(level))
    root.propagate = False
