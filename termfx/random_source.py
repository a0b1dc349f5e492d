"""Injectable source of randomness for effects.

Effects that scramble glyphs or pick colors draw from a RandomSource
instead of the global generator, so a seeded source gives repeatable
frames in tests.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Sequence, TypeVar

if TYPE_CHECKING:
    from termfx.models import Color

T = TypeVar("T")


class RandomSource:
    """Random glyphs, colors and integers from a private generator."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize random source.

        Args:
            seed: Optional seed for deterministic output
        """
        self.seed = seed
        self._random = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element of a non-empty sequence."""
        return self._random.choice(seq)

    def next_glyph(self, alphabet: str) -> str:
        """Return a random character from ``alphabet``."""
        return self._random.choice(alphabet)

    def next_color(self) -> Color:
        """Return a random pleasing color."""
        from termfx.colors import random_pleasing_color

        return random_pleasing_color(self)
