"""Pure frame builders for the effect engine.

Each function returns the text of one frame without any cursor movement;
the engine adds the redraw escapes, colors and timing around it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from rich.cells import cell_len

from termfx.models import DecodeSchedule

if TYPE_CHECKING:
    from termfx.colors import ColorEncoder
    from termfx.models import Color
    from termfx.random_source import RandomSource

BAR_FILL = "▓"
BAR_EMPTY = "░"

# Candidate glyphs shown by matrix decode before a position settles.
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def single_line(text: str) -> str:
    """Flatten line breaks so in-place effects stay on one row."""
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def filled_segments(step: int, total: int, width: int) -> int:
    """Return floor(width * step / total), clamped to 0..width."""
    if total <= 0:
        return width
    return max(0, min(width, width * step // total))


def bar_frame(
    step: int,
    total: int,
    width: int,
    fill: str = BAR_FILL,
    empty: str = BAR_EMPTY,
) -> str:
    """Render a loading bar line such as ``[▓▓░░] 2/4  50%``."""
    filled = filled_segments(step, total, width)
    percent = 100 * step // total if total > 0 else 100
    return f"[{fill * filled}{empty * (width - filled)}] {step}/{total} {percent:3d}%"


def spinner_frame(glyph: str, step: int, total: int, message: str = "") -> str:
    """Render a spinner line such as ``/ 3/10 Loading``."""
    line = f"{glyph} {step}/{total}"
    if message:
        line = f"{line} {message}"
    return line


def wiggle_rows(chars: Sequence[str], active: int) -> tuple[str, str]:
    """Split text into (upper, lower) rows with one raised character.

    The character at ``active`` sits on the upper row; every other
    character stays on the lower row, leaving blank cells in its place above.
    Each gap is as many cells wide as the character it stands in for.
    """
    upper = []
    lower = []
    for i, char in enumerate(chars):
        gap = " " * cell_len(char)
        if i == active:
            upper.append(char)
            lower.append(gap)
        else:
            upper.append(gap)
            lower.append(char)
    return "".join(upper).rstrip(), "".join(lower)


def wiggle_case_line(chars: Sequence[str], active: int) -> str:
    """Uppercase the active character and lowercase the rest."""
    return "".join(
        char.upper() if i == active else char.lower() for i, char in enumerate(chars)
    )


def settle_frames(
    length: int,
    passes: int,
    schedule: DecodeSchedule,
    rng: RandomSource,
) -> list[int]:
    """Compute the frame at which each position shows its true character.

    Args:
        length: Number of positions
        passes: Frames per position; the run lasts ``passes * length`` frames
        schedule: Settle order
        rng: Random source used by the random schedule

    Returns:
        One settle frame per position, each in ``0..passes * length - 1``
    """
    passes = max(passes, 1)
    last = passes * length - 1
    if schedule == DecodeSchedule.RANDOM:
        return [rng.randint(0, last) for _ in range(length)]
    return [(j + 1) * passes - 1 for j in range(length)]


def decode_line(
    chars: Sequence[str],
    frame: int,
    settle: Sequence[int],
    rng: RandomSource,
    alphabet: str = SYMBOLS,
) -> str:
    """Render one matrix-decode frame.

    Settled positions and whitespace show the true character; all others
    show a fresh random glyph from ``alphabet``.
    """
    return "".join(
        char if frame >= settle[j] or char.isspace() else rng.next_glyph(alphabet)
        for j, char in enumerate(chars)
    )


def rainbow_line(
    text: str,
    palette: Sequence[Color],
    offset: int,
    encoder: ColorEncoder,
) -> str:
    """Color character j with ``palette[(offset + j) % len(palette)]``."""
    if not palette:
        return text
    size = len(palette)
    body = "".join(
        f"{encoder.prefix(palette[(offset + j) % size])}{char}"
        for j, char in enumerate(text)
    )
    return f"{body}{encoder.reset}"


def slide_line(text: str, padding: int) -> str:
    """Left-pad text by ``padding`` spaces."""
    return f"{' ' * max(padding, 0)}{text}"
