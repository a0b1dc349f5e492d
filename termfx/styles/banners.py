"""Banners combining ASCII art with text.

The art occupies a left column; text lines are placed beside it, aligned
to the top, middle or bottom of the art and centered in their own column.
"""

from __future__ import annotations

from enum import Enum

from rich.cells import cell_len

from termfx.exceptions import InvalidArgumentError
from termfx.formatting import center_text


class Position(str, Enum):
    """Vertical position of the text relative to the art."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Banner:
    """ASCII art with text alongside it."""

    def __init__(
        self,
        ascii_art: str,
        text: str,
        padding: int = 2,
        position: Position | str = Position.MIDDLE,
        width: int | None = None,
    ) -> None:
        """Initialize banner.

        Args:
            ascii_art: The art shown in the left column
            text: Text shown beside the art
            padding: Spaces between the art column and the text
            position: Vertical alignment of the text
            width: Width the text is centered within (terminal width if None)
        """
        if padding < 0:
            msg = f"Banner padding must be non-negative, got {padding}"
            raise InvalidArgumentError(msg)
        self.ascii_art = ascii_art
        self.text = text
        self.padding = padding
        self.position = Position(position)
        self.width = width

    def _text_start(self, art_lines: int, text_lines: int) -> int:
        if self.position == Position.TOP:
            return 0
        spare = max(art_lines - text_lines, 0)
        if self.position == Position.MIDDLE:
            return spare // 2
        return spare

    def render(self) -> str:
        """Render the banner.

        Every art line is emitted; text lines that do not fit beside the
        art continue below it in the text column.
        """
        art_lines = self.ascii_art.splitlines()
        text_lines = self.text.splitlines()
        art_width = max((cell_len(line) for line in art_lines), default=0)

        start = self._text_start(len(art_lines), len(text_lines))
        total = max(len(art_lines), start + len(text_lines))
        gap = " " * self.padding

        result = []
        for i in range(total):
            art_line = art_lines[i] if i < len(art_lines) else ""
            text_line = ""
            if start <= i < start + len(text_lines):
                text_line = center_text(text_lines[i - start], self.width)
            fill = " " * (art_width - cell_len(art_line))
            result.append(f"{art_line}{fill}{gap}{text_line}".rstrip())

        return "\n".join(result).rstrip()


def create_banner(
    ascii_art: str,
    text: str,
    padding: int = 2,
    position: Position | str = Position.MIDDLE,
    width: int | None = None,
) -> str:
    """Create and render a banner in one call."""
    return Banner(ascii_art, text, padding, position, width).render()
