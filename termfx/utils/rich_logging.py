"""Rich logging integration for termfx.

Log output goes to stderr so it never interleaves with effect frames on
stdout.
"""

from __future__ import annotations

import logging
import re
import sys

from rich.console import Console
from rich.logging import RichHandler

_MARKUP_RE = re.compile(r"\[/?[^\]]+\]")


def strip_rich_markup(text: str) -> str:
    """Remove Rich markup tags like [red] and [/bold] from text."""
    return _MARKUP_RE.sub("", text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a RichHandler writing to stderr.

    Args:
        console: Optional Rich Console instance
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    Returns:
        Configured RichHandler instance

    """
    if console is None:
        console = Console(file=sys.stderr, stderr=True, markup=True)

    return RichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        markup=True,
    )
