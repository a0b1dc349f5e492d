"""Animated text effects.

The engine drives frame loops; frame builders and spinner styles are pure
helpers it renders with.
"""

from __future__ import annotations

from termfx.effects.engine import (
    EffectEngine,
    FrameLoop,
    loading_bar,
    matrix_decode,
    progress_spinner,
    rainbow_text,
    slide_in,
    typewriter,
    wiggle,
)
from termfx.effects.frames import SYMBOLS
from termfx.effects.spinners import SpinnerStyle

__all__ = [
    "SYMBOLS",
    "EffectEngine",
    "FrameLoop",
    "SpinnerStyle",
    "loading_bar",
    "matrix_decode",
    "progress_spinner",
    "rainbow_text",
    "slide_in",
    "typewriter",
    "wiggle",
]
