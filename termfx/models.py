"""Pydantic models for termfx.

Provides validated value types for colors and effect settings, plus the
configuration models loaded by the config manager.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ColorMode(str, Enum):
    """How colors are encoded into escape sequences."""

    TRUECOLOR = "truecolor"  # ESC[38;2;r;g;bm
    ANSI256 = "ansi256"  # ESC[38;5;nm
    NONE = "none"  # no color escapes at all


class WiggleMode(str, Enum):
    """Rendering styles for the wiggle effect."""

    BASELINE = "baseline"
    CASE = "case"


class DecodeSchedule(str, Enum):
    """Order in which matrix-decode positions settle."""

    LEFT_TO_RIGHT = "left_to_right"
    RANDOM = "random"


class Color(BaseModel):
    """An immutable 24-bit RGB color.

    Channels outside 0..255 are rejected at construction. Colors can be built
    positionally, ``Color(255, 0, 0)``, or by keyword.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")

    def __init__(self, *args: int, **data: Any) -> None:
        """Initialize color from positional or keyword channels."""
        if args:
            if len(args) != 3:
                msg = f"Color takes exactly 3 positional channels, got {len(args)}"
                raise TypeError(msg)
            data.update(zip(("r", "g", "b"), args))
        super().__init__(**data)

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Return the (red, green, blue) channels."""
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Return the color as ``#rrggbb``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_256(self) -> int:
        """Return the nearest xterm-256 palette index (16..255)."""
        from termfx.colors import quantize_256

        return quantize_256(self)

    @classmethod
    def parse(cls, value: str | Color | tuple[int, int, int]) -> Color:
        """Parse a color from a hex string, ``r,g,b`` triple or name."""
        from termfx.colors import parse_color

        return parse_color(value)

    def __str__(self) -> str:
        """Return the hex representation."""
        return self.hex


class EffectSettings(BaseModel):
    """Per-call configuration for an effect.

    Read-only: effects receive their own instance and never modify it.
    """

    model_config = ConfigDict(frozen=True)

    delay: int = Field(
        default=50,
        ge=0,
        description="Delay between frames in milliseconds",
    )
    iterations: int = Field(
        default=3,
        ge=0,
        description="Repeat count for cyclic effects",
    )
    width: int = Field(
        default=40,
        gt=0,
        description="Bar length for bar-style effects and slide-in span",
    )


class DisplayConfig(BaseModel):
    """Terminal output configuration."""

    color_mode: ColorMode = Field(
        default=ColorMode.TRUECOLOR,
        description="Color escape encoding",
    )
    hide_cursor: bool = Field(
        default=True,
        description="Hide the cursor while in-place effects redraw",
    )
    fallback_width: int = Field(
        default=80,
        gt=0,
        description="Terminal width used when the real width is unknown",
    )
    fallback_height: int = Field(
        default=24,
        gt=0,
        description="Terminal height used when the real height is unknown",
    )


class ObservabilityConfig(BaseModel):
    """Logging configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Write JSON records to the log file",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class Config(BaseModel):
    """Main configuration model."""

    effects: EffectSettings = Field(
        default_factory=EffectSettings,
        description="Default effect settings",
    )
    display: DisplayConfig = Field(
        default_factory=DisplayConfig,
        description="Display configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
