"""Frame clock: the blocking delay between animation frames."""

from __future__ import annotations

import time


class FrameClock:
    """Blocks the calling thread between frames."""

    def sleep(self, ms: int) -> None:
        """Sleep for ``ms`` milliseconds; zero or negative returns at once."""
        if ms <= 0:
            return
        time.sleep(ms / 1000)
