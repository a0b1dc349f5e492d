"""Primitive terminal driver.

TerminalHandle owns one output stream and emits the raw ANSI control
sequences the effect engine needs: cursor visibility and movement, line and
screen clearing, and the window title. Cursor visibility is process-wide
terminal state, so hiding it is exposed as a scoped context manager that
always restores it.
"""

from __future__ import annotations

import contextlib
import shutil
import sys
from typing import TYPE_CHECKING, TextIO

from termfx.utils.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)

CSI = "\x1b["
OSC = "\x1b]"
BEL = "\x07"

HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
CLEAR_LINE = f"{CSI}2K"
CLEAR_SCREEN = f"{CSI}2J{CSI}1;1H"


class TerminalHandle:
    """Capability object for writing to a terminal stream."""

    def __init__(
        self,
        stream: TextIO | None = None,
        fallback_size: tuple[int, int] = (80, 24),
    ) -> None:
        """Initialize terminal handle.

        Args:
            stream: Text stream to write to (defaults to sys.stdout at write time)
            fallback_size: (columns, lines) reported when the size is unknown
        """
        self._stream = stream
        self.fallback_size = fallback_size
        self._hide_depth = 0

    @property
    def stream(self) -> TextIO:
        """The output stream."""
        return self._stream if self._stream is not None else sys.stdout

    @property
    def cursor_hidden(self) -> bool:
        """Whether a hidden_cursor block is currently active."""
        return self._hide_depth > 0

    def write(self, text: str, flush: bool = True) -> None:
        """Write text to the stream, flushing by default.

        OSError from the stream propagates unchanged.
        """
        if not text:
            return
        self.stream.write(text)
        if flush:
            self.stream.flush()

    def flush(self) -> None:
        """Flush the stream."""
        self.stream.flush()

    def hide_cursor(self) -> None:
        """Hide the cursor."""
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        """Show the cursor."""
        self.write(SHOW_CURSOR)

    def clear_screen(self) -> None:
        """Clear the screen and move the cursor to the top-left corner."""
        self.write(CLEAR_SCREEN)

    def set_title(self, title: str) -> None:
        """Set the terminal window title."""
        # BEL terminates the OSC sequence, so it cannot appear in the title
        self.write(f"{OSC}0;{title.replace(BEL, '')}{BEL}")

    def clear_line(self) -> None:
        """Erase the whole current line without moving the cursor."""
        self.write(CLEAR_LINE)

    def carriage_return(self) -> None:
        """Move the cursor to column 0 of the current line."""
        self.write("\r")

    def move_to_column(self, column: int) -> None:
        """Move the cursor to a 0-based column on the current line."""
        self.write(f"{CSI}{max(column, 0) + 1}G")

    def move_up(self, lines: int = 1) -> None:
        """Move the cursor up ``lines`` rows."""
        if lines > 0:
            self.write(f"{CSI}{lines}A")

    def move_to(self, line: int, column: int) -> None:
        """Move the cursor to a 0-based screen position."""
        self.write(f"{CSI}{max(line, 0) + 1};{max(column, 0) + 1}H")

    def terminal_size(self) -> tuple[int, int]:
        """Return (columns, lines), falling back when undeterminable."""
        columns, lines = shutil.get_terminal_size(self.fallback_size)
        if columns <= 0:
            columns = self.fallback_size[0]
        if lines <= 0:
            lines = self.fallback_size[1]
        return columns, lines

    def terminal_width(self) -> int:
        """Return the terminal width in columns (always positive)."""
        return self.terminal_size()[0]

    def terminal_height(self) -> int:
        """Return the terminal height in lines (always positive)."""
        return self.terminal_size()[1]

    @contextlib.contextmanager
    def hidden_cursor(self) -> Iterator[TerminalHandle]:
        """Hide the cursor for the duration of the block.

        The cursor is shown again on every exit path. Nested blocks only
        toggle visibility at the outermost level. If the stream itself has
        failed, restoring is best-effort and the original error wins.
        """
        outermost = self._hide_depth == 0
        if outermost:
            self.hide_cursor()
        self._hide_depth += 1
        try:
            yield self
        except BaseException:
            self._hide_depth -= 1
            if outermost:
                try:
                    self.show_cursor()
                except OSError as e:
                    logger.debug("Could not restore cursor: %s", e)
            raise
        else:
            self._hide_depth -= 1
            if outermost:
                self.show_cursor()
