"""termfx - terminal text effects and formatting helpers."""

from __future__ import annotations

__version__ = "0.1.0"

from termfx.cancellation import CancellationToken, EffectOutcome
from termfx.colors import (
    BLACK,
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RAINBOW,
    RED,
    RESET,
    WHITE,
    YELLOW,
    ColorEncoder,
    gradient,
)
from termfx.effects import (
    EffectEngine,
    SpinnerStyle,
    loading_bar,
    matrix_decode,
    progress_spinner,
    rainbow_text,
    slide_in,
    typewriter,
    wiggle,
)
from termfx.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    TermFXError,
    ValidationError,
)
from termfx.models import Color, ColorMode, DecodeSchedule, EffectSettings, WiggleMode
from termfx.terminal import TerminalHandle

__all__ = [
    "BLACK",
    "BLUE",
    "CYAN",
    "GREEN",
    "MAGENTA",
    "RAINBOW",
    "RED",
    "RESET",
    "WHITE",
    "YELLOW",
    "CancellationToken",
    "Color",
    "ColorEncoder",
    "ColorMode",
    "ConfigurationError",
    "DecodeSchedule",
    "EffectEngine",
    "EffectOutcome",
    "EffectSettings",
    "InvalidArgumentError",
    "SpinnerStyle",
    "TermFXError",
    "TerminalHandle",
    "ValidationError",
    "WiggleMode",
    "__version__",
    "gradient",
    "loading_bar",
    "matrix_decode",
    "progress_spinner",
    "rainbow_text",
    "slide_in",
    "typewriter",
    "wiggle",
]
