"""Color encoding for terminal output.

Maps Color values to ANSI foreground escape sequences, builds gradients
and quantizes 24-bit colors onto the xterm-256 palette.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from termfx.exceptions import InvalidArgumentError
from termfx.models import Color, ColorMode

if TYPE_CHECKING:
    from termfx.random_source import RandomSource

ESC = "\x1b"

# ANSI escape sequence to reset text formatting.
RESET = f"{ESC}[0m"

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
YELLOW = Color(255, 255, 0)
MAGENTA = Color(255, 0, 255)
CYAN = Color(0, 255, 255)
WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

NAMED_COLORS: dict[str, Color] = {
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "magenta": MAGENTA,
    "cyan": CYAN,
    "white": WHITE,
    "black": BLACK,
}

RAINBOW: tuple[Color, ...] = (
    Color(255, 0, 0),  # red
    Color(255, 127, 0),  # orange
    Color(255, 255, 0),  # yellow
    Color(0, 255, 0),  # green
    Color(0, 0, 255),  # blue
    Color(75, 0, 130),  # indigo
    Color(143, 0, 255),  # violet
)

# xterm-256: indices 16..231 are a 6x6x6 cube, 232..255 a 24-step gray ramp.
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
_GRAY_START = 232

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def ansi_prefix(color: Color) -> str:
    """Return the 24-bit foreground escape for a color."""
    return f"{ESC}[38;2;{color.r};{color.g};{color.b}m"


def ansi256_prefix(color: Color) -> str:
    """Return the 256-color foreground escape for a color."""
    return f"{ESC}[38;5;{quantize_256(color)}m"


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def _distance_sq(a: tuple[int, int, int], b: tuple[int, int, int]) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def palette_rgb(index: int) -> Color:
    """Return the color of an xterm-256 palette entry in 16..255."""
    if not 16 <= index <= 255:
        msg = f"Palette index must be in 16..255, got {index}"
        raise InvalidArgumentError(msg)
    if index >= _GRAY_START:
        level = 8 + 10 * (index - _GRAY_START)
        return Color(level, level, level)
    offset = index - 16
    return Color(
        _CUBE_LEVELS[offset // 36],
        _CUBE_LEVELS[(offset // 6) % 6],
        _CUBE_LEVELS[offset % 6],
    )


def quantize_256(color: Color) -> int:
    """Quantize a color onto the xterm-256 palette.

    Picks whichever is closer, by squared Euclidean RGB distance, of the
    nearest color-cube entry and the nearest gray-ramp entry. The mapping is
    lossy and one-directional.

    Args:
        color: Color to quantize

    Returns:
        Palette index in 16..255
    """
    ri, gi, bi = (_nearest_level(c) for c in color.rgb)
    cube_index = 16 + 36 * ri + 6 * gi + bi
    cube_rgb = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])

    average = sum(color.rgb) // 3
    gray_step = max(0, min(23, round((average - 8) / 10)))
    gray_level = 8 + 10 * gray_step
    gray_rgb = (gray_level, gray_level, gray_level)

    if _distance_sq(color.rgb, gray_rgb) < _distance_sq(color.rgb, cube_rgb):
        return _GRAY_START + gray_step
    return cube_index


class ColorEncoder:
    """Produces color escape prefixes and the reset suffix for one mode."""

    def __init__(self, mode: ColorMode | str = ColorMode.TRUECOLOR) -> None:
        """Initialize encoder.

        Args:
            mode: Color mode (truecolor, ansi256 or none)
        """
        self.mode = ColorMode(mode)

    @property
    def reset(self) -> str:
        """Reset suffix; empty when colors are disabled."""
        return "" if self.mode == ColorMode.NONE else RESET

    def prefix(self, color: Color | None) -> str:
        """Return the escape that switches the foreground to ``color``."""
        if color is None or self.mode == ColorMode.NONE:
            return ""
        if self.mode == ColorMode.ANSI256:
            return ansi256_prefix(color)
        return ansi_prefix(color)

    def wrap(self, text: str, color: Color | None) -> str:
        """Wrap text in a color's prefix and the reset suffix."""
        if color is None or not text:
            return text
        return f"{self.prefix(color)}{text}{self.reset}"


def gradient(start: Color, end: Color, steps: int) -> list[Color]:
    """Generate a color gradient between two colors.

    Args:
        start: First color of the gradient
        end: Last color of the gradient
        steps: Number of colors to produce

    Returns:
        ``steps`` colors; index 0 is ``start`` and, when ``steps >= 2``,
        the last index is ``end``.
    """
    if steps < 1:
        msg = f"Gradient needs at least one step, got {steps}"
        raise InvalidArgumentError(msg)
    if steps == 1:
        return [start]

    colors = []
    for i in range(steps):
        t = i / (steps - 1)
        colors.append(
            Color(*(round(a * (1 - t) + b * t) for a, b in zip(start.rgb, end.rgb)))
        )
    return colors


def hsv_to_rgb(hue: float, saturation: float, value: float) -> Color:
    """Convert HSV (hue in degrees, s and v in 0..1) to a Color."""
    hue = hue % 360
    c = value * saturation
    x = c * (1 - abs((hue / 60) % 2 - 1))
    m = value - c

    sector = int(hue // 60)
    if sector == 0:
        r, g, b = c, x, 0.0
    elif sector == 1:
        r, g, b = x, c, 0.0
    elif sector == 2:
        r, g, b = 0.0, c, x
    elif sector == 3:
        r, g, b = 0.0, x, c
    elif sector == 4:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return Color(*(max(0, min(255, int((ch + m) * 255))) for ch in (r, g, b)))


def hue_cycle(steps: int, saturation: float = 1.0, value: float = 1.0) -> list[Color]:
    """Return ``steps`` colors evenly spaced around the hue wheel."""
    if steps < 1:
        msg = f"Hue cycle needs at least one step, got {steps}"
        raise InvalidArgumentError(msg)
    return [hsv_to_rgb(360 * i / steps, saturation, value) for i in range(steps)]


def random_pleasing_color(rng: RandomSource) -> Color:
    """Return a random, saturated and bright color."""
    hue = rng.randint(0, 359)
    saturation = rng.randint(70, 99) / 100
    value = rng.randint(70, 99) / 100
    return hsv_to_rgb(hue, saturation, value)


def parse_color(value: str | Color | tuple[int, int, int]) -> Color:
    """Parse a color from ``#rrggbb``, ``rrggbb``, ``r,g,b`` or a name."""
    if isinstance(value, Color):
        return value
    if isinstance(value, tuple):
        return Color(*value)

    text = value.strip().lower()
    if text in NAMED_COLORS:
        return NAMED_COLORS[text]

    match = _HEX_RE.match(text)
    if match:
        digits = match.group(1)
        return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    parts = [p.strip() for p in text.split(",")]
    if len(parts) == 3 and all(p.isdigit() for p in parts):
        try:
            return Color(*(int(p) for p in parts))
        except ValueError as e:
            msg = f"Color channels out of range: {value!r}"
            raise InvalidArgumentError(msg) from e

    msg = f"Unrecognized color: {value!r}"
    raise InvalidArgumentError(msg, {"known_names": sorted(NAMED_COLORS)})
