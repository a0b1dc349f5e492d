"""Spinner styles.

A closed set of glyph cycles. Integers and names are accepted at the API
boundary and resolved here; anything unknown is rejected.
"""

from __future__ import annotations

from enum import Enum

from termfx.exceptions import InvalidArgumentError


class SpinnerStyle(Enum):
    """Named spinner glyph cycles."""

    CLASSIC = ("|", "/", "-", "\\")
    DOTS = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
    ARROWS = ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙")

    @property
    def glyphs(self) -> tuple[str, ...]:
        """The glyph cycle."""
        return self.value

    @property
    def index(self) -> int:
        """Position of the style in declaration order."""
        return list(SpinnerStyle).index(self)

    def glyph(self, frame: int) -> str:
        """Return the glyph for a 0-based frame number."""
        return self.value[frame % len(self.value)]

    @classmethod
    def resolve(cls, style: SpinnerStyle | int | str) -> SpinnerStyle:
        """Resolve a style, its integer index or its name.

        Raises:
            InvalidArgumentError: If the style is unknown
        """
        if isinstance(style, SpinnerStyle):
            return style
        styles = list(cls)
        # bool is an int subclass; True is not a style
        if isinstance(style, int) and not isinstance(style, bool):
            if 0 <= style < len(styles):
                return styles[style]
        elif isinstance(style, str):
            name = style.strip().upper()
            if name in cls.__members__:
                return cls[name]
            if name.isdigit():
                return cls.resolve(int(name))
        msg = f"Unknown spinner style: {style!r}"
        raise InvalidArgumentError(
            msg, {"styles": [s.name.lower() for s in styles]}
        )
