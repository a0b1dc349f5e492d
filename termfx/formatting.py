"""Static text formatting.

Pure functions producing ready-to-print strings: colored text, fades,
centered lines, boxes and tables. Widths are measured in terminal cells.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Sequence

from rich import box
from rich.cells import cell_len
from rich.console import Console
from rich.table import Table

from termfx.colors import RAINBOW, ColorEncoder
from termfx.terminal import TerminalHandle

if TYPE_CHECKING:
    from termfx.models import Color

_DEFAULT_ENCODER = ColorEncoder()


def colored(text: str, color: Color, encoder: ColorEncoder | None = None) -> str:
    """Wrap text in a color escape and the reset suffix."""
    return (encoder or _DEFAULT_ENCODER).wrap(text, color)


def print_colored(
    text: str,
    color: Color,
    terminal: TerminalHandle | None = None,
    encoder: ColorEncoder | None = None,
) -> None:
    """Write colored text without a newline."""
    (terminal or TerminalHandle()).write(colored(text, color, encoder))


def println_colored(
    text: str,
    color: Color,
    terminal: TerminalHandle | None = None,
    encoder: ColorEncoder | None = None,
) -> None:
    """Write colored text followed by a newline."""
    (terminal or TerminalHandle()).write(f"{colored(text, color, encoder)}\n")


def fade_text(
    text: str,
    colors: Sequence[Color],
    encoder: ColorEncoder | None = None,
) -> str:
    """Spread a sequence of colors evenly across the characters of text.

    Character i takes ``colors[i * len(colors) // len(text)]``.
    """
    if not text or not colors:
        return text
    encoder = encoder or _DEFAULT_ENCODER
    body = "".join(
        f"{encoder.prefix(colors[i * len(colors) // len(text)])}{char}"
        for i, char in enumerate(text)
    )
    return f"{body}{encoder.reset}"


def print_fade(
    text: str,
    colors: Sequence[Color],
    terminal: TerminalHandle | None = None,
    encoder: ColorEncoder | None = None,
) -> None:
    """Write faded text without a newline."""
    (terminal or TerminalHandle()).write(fade_text(text, colors, encoder))


def rainbow_string(
    text: str,
    palette: Sequence[Color] = RAINBOW,
    offset: int = 0,
    encoder: ColorEncoder | None = None,
) -> str:
    """Color each character by cycling through ``palette``."""
    if not text or not palette:
        return text
    encoder = encoder or _DEFAULT_ENCODER
    body = "".join(
        f"{encoder.prefix(palette[(offset + j) % len(palette)])}{char}"
        for j, char in enumerate(text)
    )
    return f"{body}{encoder.reset}"


def center_text(text: str, width: int | None = None) -> str:
    """Left-pad text so it is centered within ``width`` columns.

    Uses the terminal width when ``width`` is None. Text wider than the
    width is returned unchanged.
    """
    if width is None:
        width = TerminalHandle().terminal_width()
    padding = max(width - cell_len(text), 0) // 2
    return f"{' ' * padding}{text}"


def box_text(text: str) -> str:
    """Surround text with a double-line box.

    Lines are left-aligned to the widest one with one space of padding.
    """
    lines = text.splitlines() or [""]
    inner = max(cell_len(line) for line in lines)
    horizontal = "═" * (inner + 2)

    result = [f"╔{horizontal}╗"]
    for line in lines:
        fill = " " * (inner - cell_len(line))
        result.append(f"║ {line}{fill} ║")
    result.append(f"╚{horizontal}╝")
    return "\n".join(result)


def table_text(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    title: str | None = None,
    width: int | None = None,
) -> str:
    """Lay out rows under headers in a box-drawn table.

    Rendered through Rich with colors disabled, so the result is plain text.

    Args:
        headers: Column headings
        rows: Row values, converted with ``str``; short rows are padded
        title: Optional title above the table
        width: Maximum table width (defaults to the terminal width)

    Returns:
        Table text without a trailing newline
    """
    table = Table(title=title, box=box.DOUBLE, show_lines=False)
    for header in headers:
        table.add_column(str(header))
    for row in rows:
        cells = [str(value) for value in row][: len(headers)]
        cells.extend("" for _ in range(len(headers) - len(cells)))
        table.add_row(*cells)

    if width is None:
        width = TerminalHandle().terminal_width()
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
    )
    console.print(table)
    return buffer.getvalue().rstrip("\n")
